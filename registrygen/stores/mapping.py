"""Persistent store for a registry's bound key-to-value mapping."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping

from ..fileio import atomic_write_text
from ..logging import get_logger
from ..models import AssetFile, EnumMember

_LOGGER = get_logger("stores.mapping")

_MAPPING_VERSION = 1


class MappingStore:
    """Saves the ordered registry mapping; a store without a path keeps it in memory only."""

    def __init__(self, path: Path | None) -> None:
        self._path = path

    @property
    def path(self) -> Path | None:
        return self._path

    def save(self, registry_name: str, mapping: Mapping[EnumMember, Any]) -> None:
        if self._path is None:
            _LOGGER.debug("No mapping path configured for %s; mapping kept in memory", registry_name)
            return
        payload = {
            "version": _MAPPING_VERSION,
            "registry": registry_name,
            "entries": [
                {"key": key.name, "id": key.value, "value": _value_to_payload(value)}
                for key, value in mapping.items()
            ],
        }
        atomic_write_text(
            self._path, json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
        )
        _LOGGER.info("Saved %d mapping entries for %s: %s", len(mapping), registry_name, self._path)

    def load(self) -> List[Dict[str, Any]]:
        """Return stored entries, or an empty list when the file is absent or invalid."""
        if self._path is None:
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            _LOGGER.warning("Failed to read mapping %s: %s", self._path, exc)
            return []
        if not isinstance(data, dict) or data.get("version") != _MAPPING_VERSION:
            return []
        entries = data.get("entries")
        if not isinstance(entries, list):
            return []
        return [entry for entry in entries if isinstance(entry, dict)]


def _value_to_payload(value: Any) -> Any:
    if isinstance(value, AssetFile):
        return value.relative_path
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value


__all__ = ["MappingStore"]
