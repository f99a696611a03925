"""Generate a registry class, its editor, and any missing key/value type stubs."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .catalog import CompositeTypeCatalog, SourceTypeCatalog, TypeCatalog, builtin_catalog
from .codegen.fragments import AttributeList, ClassFragment, EnumFragment, ImportList
from .codegen.renderer import ScriptRenderer
from .codegen.scripts import Script, save_script, save_script_if_missing
from .config import ScriptRequest
from .errors import TypeShapeError
from .logging import get_logger
from .models import TypeDescriptor

REGISTRY_IMPORTS = ImportList.of("ScriptableRegistry", "UnityEngine")
EDITOR_IMPORTS = ImportList.of("UnityEditor", "ScriptableRegistry.Editor")

REGISTRY_BASE_FORMAT = "ScriptableRegistryObjectBase<{key}, {value}>"
EDITOR_BASE_FORMAT = "ScriptableRegistryObjectBaseEditor<{script}, {key}, {value}, {file}>"
EDITOR_ATTRIBUTE_FORMAT = "CustomEditor(typeof({script}))"
VALUE_ATTRIBUTE = "System.Serializable"

_IDENTITY_BODY = """\
protected override {value} CreateValue({value} file)
{{
    return file;
}}
"""
_DEFAULT_INSTANCE_BODY = """\
protected override {value} CreateValue({file} file)
{{
    return new {value}();
}}
"""


def asset_menu_attribute(menu_name: str, file_name: str) -> str:
    """Build the ``CreateAssetMenu`` attribute, omitting whichever arguments are empty."""
    arguments: List[str] = []
    if menu_name:
        arguments.append(f'menuName = "{menu_name}"')
    if file_name:
        arguments.append(f'fileName = "{file_name}"')
    if not arguments:
        return "CreateAssetMenu"
    return f"CreateAssetMenu({', '.join(arguments)})"


def editor_body(value_type: str, file_type: str) -> str:
    """Body of the editor's ``CreateValue`` override."""
    if value_type == file_type:
        return _IDENTITY_BODY.format(value=value_type)
    return _DEFAULT_INSTANCE_BODY.format(value=value_type, file=file_type)


class RegistryCreator:
    """Writes the scripts that declare a new registry.

    Key and value stubs are only written when no type of that name exists
    yet; the registry and editor classes are always regenerated.
    """

    def __init__(
        self,
        catalog: TypeCatalog | None = None,
        renderer: ScriptRenderer | None = None,
    ) -> None:
        self.catalog = catalog
        self.renderer = renderer or ScriptRenderer()
        self.logger = get_logger("creator")

    def create(self, request: ScriptRequest) -> List[Path]:
        request = request.with_defaults()
        request.validate()
        catalog = self.catalog or CompositeTypeCatalog(
            SourceTypeCatalog([request.root]), builtin_catalog()
        )

        file_descriptor = catalog.lookup(request.file_type)
        if file_descriptor is None or not file_descriptor.is_asset:
            raise TypeShapeError(request.file_type, "is not a valid target file type")
        file_namespace = file_descriptor.namespace

        written: List[Path] = []
        written.extend(self._create_key_stub(request, catalog))
        written.extend(self._create_value_stub(request, catalog))

        extras = (request.key_namespace, request.value_namespace, file_namespace)
        registry = ClassFragment(
            name=request.script_name,
            namespace=request.namespace,
            imports=ImportList.compose(REGISTRY_IMPORTS, extras, own_namespace=request.namespace),
            attributes=AttributeList.of(asset_menu_attribute(request.menu_name, request.file_name or "")),
            base_types=(REGISTRY_BASE_FORMAT.format(key=request.key_type, value=request.value_type),),
        )
        written.append(self._save(request.root, registry))

        editor = ClassFragment(
            name=request.editor_name,
            namespace=request.editor_namespace or "",
            imports=ImportList.compose(
                EDITOR_IMPORTS,
                (request.namespace,) + extras,
                own_namespace=request.editor_namespace or "",
            ),
            attributes=AttributeList.of(EDITOR_ATTRIBUTE_FORMAT.format(script=request.script_name)),
            base_types=(
                EDITOR_BASE_FORMAT.format(
                    script=request.script_name,
                    key=request.key_type,
                    value=request.value_type,
                    file=request.file_type,
                ),
            ),
            content=editor_body(request.value_type, request.file_type),
        )
        written.append(self._save(request.editor_path, editor))

        self.logger.info("Created registry %s (%d scripts written)", request.script_name, len(written))
        return written

    def _create_key_stub(self, request: ScriptRequest, catalog: TypeCatalog) -> List[Path]:
        existing = catalog.lookup(request.key_type, request.key_namespace)
        if existing is not None:
            if not existing.is_enum:
                raise TypeShapeError(existing.full_name, "is not an enum")
            return []
        fragment = EnumFragment(name=request.key_type, namespace=request.key_namespace)
        return self._save_if_missing(request.root, fragment)

    def _create_value_stub(self, request: ScriptRequest, catalog: TypeCatalog) -> List[Path]:
        existing = catalog.lookup(request.value_type, request.value_namespace)
        if existing is not None:
            if not _is_bindable_value(existing):
                raise TypeShapeError(existing.full_name, "is not a serializable class or struct")
            return []
        fragment = ClassFragment(
            name=request.value_type,
            namespace=request.value_namespace,
            attributes=AttributeList.of(VALUE_ATTRIBUTE),
        )
        return self._save_if_missing(request.root, fragment)

    def _save(self, root: Optional[Path], fragment) -> Path:
        return save_script(Script.create(root, fragment.name, self.renderer.render(fragment)))

    def _save_if_missing(self, root: Path, fragment) -> List[Path]:
        script = Script.create(root, fragment.name, self.renderer.render(fragment))
        return [script.path] if save_script_if_missing(script) else []


def _is_bindable_value(descriptor: TypeDescriptor) -> bool:
    if descriptor.is_enum:
        return False
    return descriptor.serializable or descriptor.is_asset


__all__ = ["RegistryCreator", "asset_menu_attribute", "editor_body"]
