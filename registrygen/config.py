"""Configuration loading for registrygen (.registrygen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import yaml

from .errors import ConfigError
from .identifiers import is_valid_identifier, is_valid_qualified_name
from .models import EnumMember, Extension
from .stores.id_map import id_map_path

CONFIG_FILENAME = ".registrygen.yml"

DEFAULT_SCRIPT_NAME = "RegisterObject"
DEFAULT_SCRIPT_ROOT = "Assets"
DEFAULT_MENU_NAME = "ScriptableRegistry/"
EDITOR_FOLDER = "Editor"


@dataclass
class RegistryDefinition:
    """Scan parameters and generated outputs for one registry.

    The pipeline reads the scan fields and writes back ``mapping``; saving the
    mapping is left to a :class:`~registrygen.stores.MappingStore`.
    """

    name: str
    folder_path: Optional[Path] = None
    enum_output_path: Optional[Path] = None
    enum_name: str = ""
    enum_namespace: str = ""
    file_extensions: List[Extension] = field(default_factory=list)
    ignored_folder_names: List[str] = field(default_factory=list)
    default_names: List[str] = field(default_factory=list)
    value_type: str = ""
    file_type: str = ""
    id_map_path: Optional[Path] = None
    mapping_path: Optional[Path] = None
    mapping: Dict[EnumMember, Any] = field(default_factory=dict)

    @property
    def resolved_id_map_path(self) -> Path:
        if self.id_map_path is not None:
            return self.id_map_path
        return id_map_path(self._require_output_path(), self.enum_name)

    @property
    def enum_script_root(self) -> Path:
        return self._require_output_path()

    @property
    def enum_script_path(self) -> Path:
        return self._require_output_path() / f"{self.enum_name}.cs"

    def replace_mapping(self, pairs: Iterable[Tuple[EnumMember, Any]]) -> None:
        """Clear the mapping, then insert ``pairs`` in order."""
        self.mapping.clear()
        for key, value in pairs:
            self.mapping[key] = value

    def validate(self) -> None:
        """Raise :class:`ConfigError` for anything that would make generation write bad output."""
        label = self.name or "<unnamed>"
        if self.folder_path is None or not str(self.folder_path).strip():
            raise ConfigError(f"Registry '{label}': folder_path is required")
        self._require_output_path()
        if not self.enum_name or not self.enum_name.strip():
            raise ConfigError(f"Registry '{label}': enum_name is required")
        if not is_valid_identifier(self.enum_name):
            raise ConfigError(f"Registry '{label}': enum_name '{self.enum_name}' is not a valid identifier")
        if self.enum_namespace and not is_valid_qualified_name(self.enum_namespace):
            raise ConfigError(
                f"Registry '{label}': enum_namespace '{self.enum_namespace}' is not a valid namespace"
            )
        if not any(extension.value for extension in self.file_extensions):
            raise ConfigError(f"Registry '{label}': at least one file extension is required")
        self.check_mapping_path()

    def check_mapping_path(self) -> None:
        """Raise :class:`ConfigError` when saving the mapping would overwrite a generated file."""
        if self.mapping_path is None or self.enum_output_path is None:
            return
        mapping_path = self.mapping_path.resolve()
        for what, other in (
            ("id map", self.resolved_id_map_path),
            ("enum script", self.enum_script_path),
        ):
            if mapping_path == other.resolve():
                raise ConfigError(
                    f"Registry '{self.name or '<unnamed>'}': mapping_path {self.mapping_path} "
                    f"is the same file as the {what}"
                )

    def _require_output_path(self) -> Path:
        if self.enum_output_path is None or not str(self.enum_output_path).strip():
            raise ConfigError(f"Registry '{self.name or '<unnamed>'}': enum_output_path is required")
        return self.enum_output_path


@dataclass
class ScriptRequest:
    """Inputs for generating a registry class and its companion editor class.

    Fields left empty are filled from the script name and namespace; see
    :meth:`with_defaults`.
    """

    script_name: str = DEFAULT_SCRIPT_NAME
    root: Path = Path(DEFAULT_SCRIPT_ROOT)
    namespace: str = ""
    editor_name: str = ""
    editor_path: Optional[Path] = None
    editor_namespace: Optional[str] = None
    menu_name: str = DEFAULT_MENU_NAME
    file_name: Optional[str] = None
    key_type: str = ""
    key_namespace: str = ""
    value_type: str = ""
    value_namespace: str = ""
    file_type: str = ""

    def with_defaults(self) -> "ScriptRequest":
        script_name = (self.script_name or "").strip() or DEFAULT_SCRIPT_NAME
        namespace = (self.namespace or "").strip()
        editor_namespace = self.editor_namespace
        if editor_namespace is None:
            editor_namespace = f"{namespace}.{EDITOR_FOLDER}" if namespace else EDITOR_FOLDER
        return replace(
            self,
            script_name=script_name,
            namespace=namespace,
            editor_name=(self.editor_name or "").strip() or f"{script_name}Editor",
            editor_path=self.editor_path or self.root / EDITOR_FOLDER,
            editor_namespace=editor_namespace.strip(),
            file_name=script_name if self.file_name is None else self.file_name.strip(),
            key_type=(self.key_type or "").strip(),
            key_namespace=(self.key_namespace or "").strip(),
            value_type=(self.value_type or "").strip(),
            value_namespace=(self.value_namespace or "").strip(),
            file_type=(self.file_type or "").strip(),
        )

    def validate(self) -> None:
        if self.root is None or not str(self.root).strip():
            raise ConfigError("Script save path is required")
        for label, value in (
            ("script_name", self.script_name),
            ("editor_name", self.editor_name),
            ("key_type", self.key_type),
            ("value_type", self.value_type),
            ("file_type", self.file_type),
        ):
            if not value or not value.strip():
                raise ConfigError(f"{label} is required")
            if not is_valid_identifier(value):
                raise ConfigError(f"{label} '{value}' is not a valid identifier")
        for label, value in (
            ("namespace", self.namespace),
            ("editor_namespace", self.editor_namespace),
            ("key_namespace", self.key_namespace),
            ("value_namespace", self.value_namespace),
        ):
            if value and not is_valid_qualified_name(value):
                raise ConfigError(f"{label} '{value}' is not a valid namespace")


@dataclass
class RegistryGenConfig:
    """Represents the settings defined in .registrygen.yml."""

    root: Path
    registries: List[RegistryDefinition] = field(default_factory=list)
    scripts: List[ScriptRequest] = field(default_factory=list)

    def registry(self, name: str) -> RegistryDefinition:
        for definition in self.registries:
            if definition.name == name:
                return definition
        known = ", ".join(definition.name for definition in self.registries) or "none"
        raise ConfigError(f"Unknown registry '{name}' (configured: {known})")


def load_config(config_path: Path) -> RegistryGenConfig:
    """Load configuration from disk; a missing file yields an empty configuration."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RegistryGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    registries: List[RegistryDefinition] = []
    for index, raw in enumerate(_as_list(data.get("registries"))):
        entry = _as_dict(raw)
        if not entry:
            raise ConfigError(f"registries[{index}] must be a mapping")
        registries.append(_parse_registry(entry, root, index))

    scripts: List[ScriptRequest] = []
    for index, raw in enumerate(_as_list(data.get("scripts"))):
        entry = _as_dict(raw)
        if not entry:
            raise ConfigError(f"scripts[{index}] must be a mapping")
        scripts.append(_parse_script(entry, root))

    _check_unique_outputs(registries)
    return RegistryGenConfig(root=root, registries=registries, scripts=scripts)


def _parse_registry(entry: Dict[str, Any], root: Path, index: int) -> RegistryDefinition:
    enum_name = _as_str(entry.get("enum_name")) or ""
    name = _as_str(entry.get("name")) or enum_name or f"registry{index}"
    return RegistryDefinition(
        name=name,
        folder_path=_as_path(entry.get("folder_path"), root),
        enum_output_path=_as_path(entry.get("enum_output_path"), root),
        enum_name=enum_name.strip(),
        enum_namespace=(_as_str(entry.get("enum_namespace")) or "").strip(),
        file_extensions=[Extension(value) for value in _as_str_list(entry.get("file_extensions"))],
        ignored_folder_names=_as_str_list(entry.get("ignored_folder_names")),
        default_names=_as_str_list(entry.get("default_names")),
        value_type=(_as_str(entry.get("value_type")) or "").strip(),
        file_type=(_as_str(entry.get("file_type")) or "").strip(),
        id_map_path=_as_path(entry.get("id_map_path"), root),
        mapping_path=_as_path(entry.get("mapping_path"), root),
    )


def _parse_script(entry: Dict[str, Any], root: Path) -> ScriptRequest:
    request = ScriptRequest(
        script_name=_as_str(entry.get("script_name")) or DEFAULT_SCRIPT_NAME,
        root=_as_path(entry.get("root"), root) or root / DEFAULT_SCRIPT_ROOT,
        namespace=_as_str(entry.get("namespace")) or "",
        editor_name=_as_str(entry.get("editor_name")) or "",
        editor_path=_as_path(entry.get("editor_path"), root),
        editor_namespace=_as_str(entry.get("editor_namespace")),
        menu_name=(_as_str(entry.get("menu_name")) or "") if "menu_name" in entry else DEFAULT_MENU_NAME,
        file_name=_as_str(entry.get("file_name")),
        key_type=_as_str(entry.get("key_type")) or "",
        key_namespace=_as_str(entry.get("key_namespace")) or "",
        value_type=_as_str(entry.get("value_type")) or "",
        value_namespace=_as_str(entry.get("value_namespace")) or "",
        file_type=_as_str(entry.get("file_type")) or "",
    )
    return request.with_defaults()


def _check_unique_outputs(registries: Sequence[RegistryDefinition]) -> None:
    seen_names: set[str] = set()
    seen_outputs: Dict[Path, str] = {}
    for definition in registries:
        if definition.name in seen_names:
            raise ConfigError(f"Registry name '{definition.name}' is defined more than once")
        seen_names.add(definition.name)
        outputs: List[Path] = []
        if definition.enum_output_path is not None and definition.enum_name:
            outputs.append(definition.enum_script_path.resolve())
            outputs.append(definition.resolved_id_map_path.resolve())
        if definition.mapping_path is not None:
            outputs.append(definition.mapping_path.resolve())
        for output in outputs:
            owner = seen_outputs.get(output)
            if owner == definition.name:
                raise ConfigError(f"Registry '{owner}' writes more than one output to {output}")
            if owner is not None:
                raise ConfigError(
                    f"Registries '{owner}' and '{definition.name}' both write to {output}"
                )
            seen_outputs[output] = definition.name


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    raise ConfigError(f"Expected a list, got {type(value).__name__}")


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_path(value: Any, root: Path) -> Optional[Path]:
    text = _as_str(value)
    if text is None or not text.strip():
        return None
    path = Path(text.strip()).expanduser()
    return path if path.is_absolute() else root / path


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "RegistryDefinition",
    "RegistryGenConfig",
    "ScriptRequest",
    "load_config",
]
