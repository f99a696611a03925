"""Stable numeric id allocation for generated enum members."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .identifiers import sanitize
from .logging import get_logger
from .models import IdentifierEntry, IdMap

_LOGGER = get_logger("allocator")


def allocate(previous: IdMap, candidate_raw_names: Sequence[Optional[str]]) -> IdMap:
    """Build a new id map for ``candidate_raw_names`` that keeps every id in ``previous``.

    Names are matched by their sanitized identifier, not their raw text, so
    ``"Fire "`` and ``"Fire"`` share an id. Names new to this pass receive ids
    above the previous maximum, in candidate order. Ids of names that dropped
    out are not handed to newcomers in the same pass.
    """
    raw_names = _unique_raw_names(candidate_raw_names)
    if not raw_names:
        _LOGGER.warning("No enum parameters provided.")
        return IdMap()

    max_id = previous.max_id()
    next_id = 0 if max_id is None else max_id + 1

    entries: List[IdentifierEntry] = []
    taken: set[str] = set()
    for raw in raw_names:
        safe_name = sanitize(raw)
        if not safe_name:
            _LOGGER.warning("Skipping '%s': no valid identifier remains after sanitization.", raw)
            continue
        if safe_name in taken:
            _LOGGER.warning(
                "Skipping '%s': identifier '%s' is already used by an earlier entry.",
                raw,
                safe_name,
            )
            continue

        existing = previous.get(safe_name)
        if existing is not None:
            entry_id = existing.id
        else:
            entry_id = next_id
            next_id += 1

        entries.append(IdentifierEntry(raw_name=raw, safe_name=safe_name, id=entry_id))
        taken.add(safe_name)

    _LOGGER.debug(
        "Allocated %d ids (%d reused, next id %d)",
        len(entries),
        sum(1 for entry in entries if entry.safe_name in previous),
        next_id,
    )
    return IdMap(entries)


def _unique_raw_names(names: Iterable[Optional[str]]) -> List[str]:
    seen: set[str] = set()
    unique: List[str] = []
    for name in names:
        if name is None or not name.strip():
            continue
        if name in seen:
            continue
        seen.add(name)
        unique.append(name)
    return unique


__all__ = ["allocate"]
