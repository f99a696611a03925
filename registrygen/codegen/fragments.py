"""Structured descriptions of generated enum and class declarations."""

from __future__ import annotations

from dataclasses import dataclass, field
import textwrap
from typing import Iterable, Iterator, List, Sequence, Tuple

from ..errors import FragmentError
from ..models import IdentifierEntry


def _unique(items: Iterable[str]) -> Tuple[str, ...]:
    seen: set[str] = set()
    ordered: List[str] = []
    for item in items:
        if item is None:
            continue
        cleaned = item.strip()
        if not cleaned or cleaned in seen:
            continue
        seen.add(cleaned)
        ordered.append(cleaned)
    return tuple(ordered)


@dataclass(frozen=True)
class ImportList:
    """Ordered, duplicate-free list of imported namespaces (``using`` directives)."""

    modules: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", _unique(self.modules))

    @classmethod
    def of(cls, *modules: str) -> "ImportList":
        return cls(tuple(modules))

    @classmethod
    def compose(
        cls,
        base: "ImportList | Sequence[str]",
        extras: "ImportList | Sequence[str]" = (),
        *,
        own_namespace: str = "",
    ) -> "ImportList":
        """Combine base imports then extras, dropping the fragment's own namespace."""
        combined = cls(tuple(base)).add(cls(tuple(extras)))
        return combined.without(own_namespace)

    def add(self, other: "ImportList") -> "ImportList":
        return ImportList(self.modules + other.modules)

    def without(self, namespace: str | None) -> "ImportList":
        if not namespace or not namespace.strip():
            return self
        target = namespace.strip()
        return ImportList(tuple(module for module in self.modules if module != target))

    def __iter__(self) -> Iterator[str]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)


@dataclass(frozen=True)
class AttributeList:
    """Attributes applied to a declaration, rendered as ``[A, B]``."""

    names: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "names", tuple(name.strip() for name in self.names if name and name.strip())
        )

    @classmethod
    def of(cls, *names: str) -> "AttributeList":
        return cls(tuple(names))

    def render(self) -> str:
        if not self.names:
            return ""
        return f"[{', '.join(self.names)}]"

    def __len__(self) -> int:
        return len(self.names)


@dataclass
class CodeFragment:
    """Common fields of a generated declaration.

    ``name`` must already be a valid identifier; fragments never sanitize.
    """

    name: str
    namespace: str = ""
    imports: ImportList = field(default_factory=ImportList)
    attributes: AttributeList = field(default_factory=AttributeList)

    def __post_init__(self) -> None:
        if self.name is None or not str(self.name).strip():
            raise FragmentError(f"{type(self).__name__} requires a name")
        self.name = str(self.name).strip()
        self.namespace = (self.namespace or "").strip()
        if not isinstance(self.imports, ImportList):
            self.imports = ImportList(tuple(self.imports or ()))
        if not isinstance(self.attributes, AttributeList):
            self.attributes = AttributeList(tuple(self.attributes or ()))

    def declaration(self) -> str:
        raise NotImplementedError

    def body(self) -> str:
        raise NotImplementedError


@dataclass
class EnumFragment(CodeFragment):
    """An enum whose members are the given entries, in order."""

    entries: Sequence[IdentifierEntry] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        self.entries = tuple(self.entries or ())

    def declaration(self) -> str:
        return f"public enum {self.name}"

    def body(self) -> str:
        return "\n".join(f"{entry.safe_name} = {entry.id}," for entry in self.entries)


@dataclass
class ClassFragment(CodeFragment):
    """A class declaration with optional base types and free-form body text."""

    base_types: Tuple[str, ...] = ()
    content: str = ""
    visibility: str = "public"

    def __post_init__(self) -> None:
        super().__post_init__()
        self.base_types = tuple(
            base.strip() for base in (self.base_types or ()) if base and base.strip()
        )
        self.visibility = (self.visibility or "public").strip()

    def declaration(self) -> str:
        line = f"{self.visibility} class {self.name}"
        if self.base_types:
            line += f" : {', '.join(self.base_types)}"
        return line

    def body(self) -> str:
        if not self.content:
            return ""
        return textwrap.dedent(self.content).strip("\n").rstrip()


__all__ = [
    "AttributeList",
    "ClassFragment",
    "CodeFragment",
    "EnumFragment",
    "ImportList",
]
