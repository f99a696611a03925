"""Core data models shared across registrygen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class IdentifierEntry:
    """A named entry with its sanitized identifier and stable numeric id."""

    raw_name: str
    safe_name: str
    id: int


class IdMap:
    """Ordered set of identifier entries indexed by safe name."""

    def __init__(self, entries: Iterable[IdentifierEntry] = ()) -> None:
        self._entries: Dict[str, IdentifierEntry] = {}
        seen_ids: set[int] = set()
        for entry in entries:
            if entry.safe_name in self._entries:
                raise ValueError(f"Duplicate identifier in id map: {entry.safe_name}")
            if entry.id in seen_ids:
                raise ValueError(f"Duplicate id in id map: {entry.id}")
            self._entries[entry.safe_name] = entry
            seen_ids.add(entry.id)

    @property
    def entries(self) -> List[IdentifierEntry]:
        return list(self._entries.values())

    def get(self, safe_name: str) -> Optional[IdentifierEntry]:
        return self._entries.get(safe_name)

    def max_id(self) -> Optional[int]:
        if not self._entries:
            return None
        return max(entry.id for entry in self._entries.values())

    def as_dict(self) -> Dict[str, int]:
        """Return ``safe_name -> id`` in map order."""
        return {name: entry.id for name, entry in self._entries.items()}

    def __contains__(self, safe_name: object) -> bool:
        return safe_name in self._entries

    def __iter__(self) -> Iterator[IdentifierEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdMap):
            return NotImplemented
        return self.entries == other.entries

    def __repr__(self) -> str:
        return f"IdMap({self.as_dict()!r})"


@dataclass(frozen=True)
class EnumMember:
    """A resolved member of a key enum; used as a registry mapping key."""

    name: str
    value: int


@dataclass(frozen=True)
class AssetFile:
    """A discovered resource file loaded as a value of the file-asset type."""

    path: Path
    relative_path: str

    @property
    def name(self) -> str:
        """Display name: the base file name without its extension."""
        return self.path.stem


class Extension:
    """File extension filter normalised to drop surrounding whitespace and a leading dot."""

    _DOT = "."

    def __init__(self, value: str | None) -> None:
        self.value = self._normalise(value)

    @classmethod
    def _normalise(cls, value: str | None) -> str:
        if value is None or not value.strip():
            return ""
        value = value.strip()
        return value[1:] if value.startswith(cls._DOT) else value

    def to_file_name(self, file_name: str) -> str:
        return self._with_dot(file_name)

    def to_pattern(self, file_name: str = "*") -> str:
        return self._with_dot(file_name)

    def matches(self, path: Path | str) -> bool:
        """Return True when the file name ends with this extension (case-insensitive)."""
        if not self.value:
            return False
        name = Path(path).name.lower()
        return name.endswith(f"{self._DOT}{self.value.lower()}")

    def _with_dot(self, name: str) -> str:
        if not self.value:
            return name
        return f"{name}{self._DOT}{self.value}"

    def __str__(self) -> str:
        return f"{self._DOT}{self.value}" if self.value else ""

    def __repr__(self) -> str:
        return f"Extension({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extension):
            return NotImplemented
        return self.value.lower() == other.value.lower()

    def __hash__(self) -> int:
        return hash(self.value.lower())


class TypeKind(str, Enum):
    """Shape of a type known to a type catalog."""

    ENUM = "enum"
    CLASS = "class"
    STRUCT = "struct"
    ASSET = "asset"


@dataclass
class TypeDescriptor:
    """Describes a type by name, namespace, and shape."""

    name: str
    namespace: str = ""
    kind: TypeKind = TypeKind.CLASS
    serializable: bool = False
    members: Dict[str, int] = field(default_factory=dict)
    base_types: Tuple[str, ...] = ()

    @property
    def full_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    @property
    def is_enum(self) -> bool:
        return self.kind is TypeKind.ENUM

    @property
    def is_asset(self) -> bool:
        return self.kind is TypeKind.ASSET

    def member(self, name: str) -> Optional[EnumMember]:
        value = self.members.get(name)
        if value is None:
            return None
        return EnumMember(name=name, value=value)
