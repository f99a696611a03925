"""Type catalogs: look up existing key, value, and file-asset types by name."""

from __future__ import annotations

from abc import ABC, abstractmethod
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .codegen.scripts import CS_EXTENSION
from .logging import get_logger
from .models import TypeDescriptor, TypeKind

_LOGGER = get_logger("catalog")

_NAMESPACE_RE = re.compile(r"^\s*namespace\s+([\w.]+)", re.MULTILINE)
_DECLARATION_RE = re.compile(
    r"(?P<attrs>(?:\[[^\]]*\]\s*)*)"
    r"(?:(?:public|internal|private|protected|sealed|abstract|static|partial)\s+)*"
    r"\b(?P<kind>enum|class|struct)\s+(?P<name>\w+)"
    r"(?:\s*<[^>{]*>)?"
    r"(?:\s*:\s*(?P<bases>[^{]+))?"
    r"\s*\{",
)
_ENUM_MEMBER_RE = re.compile(r"^\s*(\w+)\s*(?:=\s*(-?\d+))?\s*,?\s*$")
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)

# Base classes whose subclasses the host persists as loadable assets.
ASSET_BASE_TYPES = frozenset(
    {
        "Object",
        "UnityEngine.Object",
        "ScriptableObject",
        "MonoBehaviour",
        "Component",
        "ScriptableRegistryObjectBase",
    }
)


class TypeCatalog(ABC):
    """Contract for anything that can answer whether a type exists and what shape it has."""

    @abstractmethod
    def lookup(self, name: str, namespace: str = "") -> Optional[TypeDescriptor]:
        """Return the descriptor for ``name``; an empty namespace matches any namespace."""


class StaticTypeCatalog(TypeCatalog):
    """Catalog over an explicit list of descriptors, in registration order."""

    def __init__(self, descriptors: Iterable[TypeDescriptor] = ()) -> None:
        self._descriptors: List[TypeDescriptor] = []
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: TypeDescriptor) -> None:
        self._descriptors.append(descriptor)

    def lookup(self, name: str, namespace: str = "") -> Optional[TypeDescriptor]:
        if not name or not name.strip():
            _LOGGER.warning("No type name provided.")
            return None
        name = name.strip()
        namespace = (namespace or "").strip()
        for descriptor in self._descriptors:
            if descriptor.name != name:
                continue
            if namespace and descriptor.namespace != namespace:
                continue
            return descriptor
        return None

    def __iter__(self):
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)


class CompositeTypeCatalog(TypeCatalog):
    """Queries several catalogs in order; the first hit wins."""

    def __init__(self, *catalogs: TypeCatalog) -> None:
        self._catalogs: Tuple[TypeCatalog, ...] = catalogs

    def lookup(self, name: str, namespace: str = "") -> Optional[TypeDescriptor]:
        for catalog in self._catalogs:
            found = catalog.lookup(name, namespace)
            if found is not None:
                return found
        return None


class SourceTypeCatalog(StaticTypeCatalog):
    """Catalog built from the declarations found in ``.cs`` files under the given roots.

    This is how freshly generated enums become resolvable without a host
    compile step. Roots that do not exist are skipped.
    """

    def __init__(self, roots: Sequence[Path]) -> None:
        super().__init__()
        self.roots = [Path(root) for root in roots]
        for root in self.roots:
            for path in _iter_sources(root):
                for descriptor in parse_declarations(_safe_read(path)):
                    self.register(descriptor)
        _LOGGER.debug("Source catalog loaded %d types from %d roots", len(self), len(self.roots))


def builtin_catalog() -> StaticTypeCatalog:
    """Host asset types that generated registries commonly bind to."""
    names = (
        "Object",
        "GameObject",
        "AudioClip",
        "Texture2D",
        "Sprite",
        "Material",
        "Mesh",
        "TextAsset",
        "AnimationClip",
        "Font",
        "ScriptableObject",
    )
    return StaticTypeCatalog(
        TypeDescriptor(name=name, namespace="UnityEngine", kind=TypeKind.ASSET) for name in names
    )


def parse_declarations(text: str) -> List[TypeDescriptor]:
    """Extract enum, class, and struct declarations from C# source text."""
    if not text:
        return []
    text = _BLOCK_COMMENT_RE.sub("", _LINE_COMMENT_RE.sub("", text))
    namespace_match = _NAMESPACE_RE.search(text)
    namespace = namespace_match.group(1) if namespace_match else ""

    descriptors: List[TypeDescriptor] = []
    for match in _DECLARATION_RE.finditer(text):
        keyword = match.group("kind")
        attrs = match.group("attrs") or ""
        bases = _split_bases(match.group("bases"))
        serializable = "Serializable" in attrs
        if keyword == "enum":
            kind = TypeKind.ENUM
            members = _parse_enum_members(text, match.end())
        else:
            members = {}
            if any(base.split("<", 1)[0].strip() in ASSET_BASE_TYPES for base in bases):
                kind = TypeKind.ASSET
            else:
                kind = TypeKind.STRUCT if keyword == "struct" else TypeKind.CLASS
        descriptors.append(
            TypeDescriptor(
                name=match.group("name"),
                namespace=namespace,
                kind=kind,
                serializable=serializable or keyword == "enum",
                members=members,
                base_types=bases,
            )
        )
    return descriptors


def _parse_enum_members(text: str, body_start: int) -> Dict[str, int]:
    body_end = text.find("}", body_start)
    body = text[body_start:] if body_end == -1 else text[body_start:body_end]
    members: Dict[str, int] = {}
    next_value = 0
    for chunk in body.replace(",", ",\n").splitlines():
        match = _ENUM_MEMBER_RE.match(chunk)
        if not match:
            continue
        name, value = match.group(1), match.group(2)
        current = int(value) if value is not None else next_value
        members[name] = current
        next_value = current + 1
    return members


def _split_bases(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in raw:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    parts.append("".join(current).strip())
    return tuple(part for part in parts if part)


def _iter_sources(root: Path) -> Iterable[Path]:
    if not root.is_dir():
        return []
    return sorted(root.rglob(CS_EXTENSION.to_pattern()))


def _safe_read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _LOGGER.warning("Failed to read types from %s: %s", path, exc)
        return ""


__all__ = [
    "ASSET_BASE_TYPES",
    "CompositeTypeCatalog",
    "SourceTypeCatalog",
    "StaticTypeCatalog",
    "TypeCatalog",
    "builtin_catalog",
    "parse_declarations",
]
