"""Persistent id map backing a generated key enum."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

from ..fileio import atomic_write_text
from ..identifiers import sanitize
from ..logging import get_logger
from ..models import IdentifierEntry, IdMap

_LOGGER = get_logger("stores.id_map")

ID_MAP_SUFFIX = ".json"


def id_map_path(root: Path, enum_name: str) -> Path:
    """Default id map location: next to the generated enum, named after it."""
    return root / f"{enum_name}{ID_MAP_SUFFIX}"


class IdMapStore:
    """Reads and writes the id map as a human-diffable JSON list of records."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> IdMap:
        """Return the persisted map; a missing or unreadable file yields an empty map."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            _LOGGER.warning("Id map not found: %s", self.path)
            return IdMap()
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            _LOGGER.warning("Failed to read id map %s: %s", self.path, exc)
            return IdMap()

        if not isinstance(data, list):
            _LOGGER.warning("Id map %s does not contain a list; ignoring it", self.path)
            return IdMap()

        entries: List[IdentifierEntry] = []
        seen_names: set[str] = set()
        seen_ids: set[int] = set()
        for record in data:
            entry = _entry_from_dict(record)
            if entry is None:
                _LOGGER.warning("Skipping malformed id map record in %s: %r", self.path, record)
                continue
            if entry.safe_name in seen_names or entry.id in seen_ids:
                _LOGGER.warning("Skipping duplicate id map record in %s: %r", self.path, record)
                continue
            seen_names.add(entry.safe_name)
            seen_ids.add(entry.id)
            entries.append(entry)
        return IdMap(entries)

    def save(self, id_map: IdMap) -> None:
        payload = [_entry_to_dict(entry) for entry in id_map]
        atomic_write_text(self.path, json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
        _LOGGER.info("Saved id map (%d entries): %s", len(id_map), self.path)


def _entry_to_dict(entry: IdentifierEntry) -> Dict[str, object]:
    return {"raw_name": entry.raw_name, "name": entry.safe_name, "id": entry.id}


def _entry_from_dict(payload: object) -> Optional[IdentifierEntry]:
    if not isinstance(payload, dict):
        return None
    raw_name = payload.get("raw_name")
    entry_id = payload.get("id")
    if not isinstance(raw_name, str):
        return None
    if isinstance(entry_id, bool) or not isinstance(entry_id, int) or entry_id < 0:
        return None
    # The stored name is informational; identity always follows the current sanitizer.
    safe_name = sanitize(raw_name)
    if not safe_name:
        return None
    return IdentifierEntry(raw_name=raw_name, safe_name=safe_name, id=entry_id)


__all__ = ["ID_MAP_SUFFIX", "IdMapStore", "id_map_path"]
