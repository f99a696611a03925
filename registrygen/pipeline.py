"""Two-phase registry build: generate the key enum, then bind files to its members."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .allocator import allocate
from .binding import Binder, binder_for
from .catalog import SourceTypeCatalog, TypeCatalog
from .codegen.fragments import EnumFragment
from .codegen.renderer import ScriptRenderer
from .codegen.scripts import Script, save_script
from .config import RegistryDefinition
from .errors import ConfigError, ResolutionError, ScanError, TypeShapeError
from .identifiers import sanitize
from .logging import get_logger
from .models import AssetFile, EnumMember, IdMap, TypeDescriptor
from .scanner import AssetScanner, base_names
from .stores.id_map import IdMapStore
from .stores.mapping import MappingStore


class PipelineState(str, Enum):
    """Where a registry stands in the generate-then-bind workflow."""

    IDLE = "idle"
    SCANNING = "scanning"
    ENUM_GENERATED = "enum_generated"
    DICTIONARY_BOUND = "dictionary_bound"


@dataclass
class BindOutcome:
    """Result of binding discovered files to key enum members."""

    mapping: Dict[EnumMember, Any]
    skipped: List[str] = field(default_factory=list)


class RegistryPipeline:
    """Coordinates scanning, id allocation, enum synthesis, and mapping binding.

    Phase one (:meth:`generate_enum`) never touches the key type: it only
    writes the id map and enum source. Phase two (:meth:`bind`) reads the key
    type back through a type catalog, so it works whether the enum was
    generated earlier in this process or in a previous run.
    """

    def __init__(
        self,
        scanner: AssetScanner | None = None,
        renderer: ScriptRenderer | None = None,
    ) -> None:
        self.scanner = scanner or AssetScanner()
        self.renderer = renderer or ScriptRenderer()
        self.state = PipelineState.IDLE
        self.logger = get_logger("pipeline")

    # ------------------------------------------------------------------
    # Phase 1

    def generate_enum(self, definition: RegistryDefinition) -> IdMap:
        """Scan, allocate stable ids, persist the id map, then write the key enum."""
        definition.validate()
        self.logger.info("Generating enum %s for registry %s", definition.enum_name, definition.name)
        self.state = PipelineState.SCANNING
        try:
            paths = self._scan(definition)
            candidates = list(definition.default_names) + base_names(paths)
            self.logger.debug(
                "%d candidate names (%d defaults)", len(candidates), len(definition.default_names)
            )

            store = IdMapStore(definition.resolved_id_map_path)
            id_map = allocate(store.load(), candidates)

            fragment = EnumFragment(
                name=definition.enum_name,
                namespace=definition.enum_namespace,
                entries=id_map.entries,
            )
            contents = self.renderer.render(fragment)

            # The id map goes first so a failed enum write never leaves ids unrecorded.
            store.save(id_map)
            save_script(Script.create(definition.enum_script_root, definition.enum_name, contents))
        except Exception:
            self.state = PipelineState.IDLE
            raise

        self.state = PipelineState.ENUM_GENERATED
        self.logger.info("Enum %s generated with %d members", definition.enum_name, len(id_map))
        return id_map

    # ------------------------------------------------------------------
    # Phase 2

    def bind(
        self,
        definition: RegistryDefinition,
        catalog: TypeCatalog | None = None,
        *,
        binder: Binder | None = None,
        store: MappingStore | None = None,
    ) -> BindOutcome:
        """Resolve discovered files to key members and replace the registry mapping."""
        definition.validate()
        if self.state is PipelineState.IDLE:
            self.logger.debug("Binding %s against the enum already on disk", definition.name)

        key_type = self._require_key_type(definition, catalog)

        paths = self._scan(definition)
        files = self.scanner.load(definition.folder_path, paths)
        if not files:
            raise ScanError("No assets loaded. Check file types or paths.")
        files.sort(key=lambda file: file.name)

        binder = binder or binder_for(definition.value_type, definition.file_type)
        pairs: List[Tuple[EnumMember, Any]] = []
        seen: Dict[EnumMember, str] = {}
        skipped: List[str] = []
        for file in files:
            try:
                key = self._resolve_key(key_type, file)
            except ResolutionError as exc:
                self.logger.warning("%s; skipping %s", exc, file.relative_path)
                skipped.append(file.relative_path)
                continue
            if key in seen:
                self.logger.warning(
                    "%s and %s both resolve to %s; keeping the later file",
                    seen[key],
                    file.relative_path,
                    key.name,
                )
            seen[key] = file.relative_path
            pairs.append((key, binder.create_value(file)))

        if not pairs:
            raise ConfigError(f"No enum keys resolved for {key_type.full_name}. Generate the enum first.")

        definition.replace_mapping(pairs)
        (store or MappingStore(definition.mapping_path)).save(definition.name, definition.mapping)
        self.state = PipelineState.DICTIONARY_BOUND
        self.logger.info("Dictionary registered: %d items.", len(definition.mapping))
        return BindOutcome(mapping=dict(definition.mapping), skipped=skipped)

    def reset(self, definition: RegistryDefinition, *, store: MappingStore | None = None) -> int:
        """Clear the registry mapping and save the empty result.

        Returns how many entries were dropped, counting the saved mapping when
        nothing was bound in memory.
        """
        definition.check_mapping_path()
        store = store or MappingStore(definition.mapping_path)
        cleared = len(definition.mapping) or len(store.load())
        definition.mapping.clear()
        store.save(definition.name, definition.mapping)
        if self.state is PipelineState.DICTIONARY_BOUND:
            self.state = PipelineState.ENUM_GENERATED
        self.logger.info("Dictionary reset for %s (%d entries cleared).", definition.name, cleared)
        return cleared

    # ------------------------------------------------------------------
    # Helpers

    def _scan(self, definition: RegistryDefinition) -> List[Path]:
        paths = self.scanner.scan(
            definition.folder_path,
            definition.file_extensions,
            definition.ignored_folder_names,
        )
        if not paths:
            raise ScanError("No target files found. Check folder path or extensions.")
        return paths

    def _require_key_type(
        self, definition: RegistryDefinition, catalog: Optional[TypeCatalog]
    ) -> TypeDescriptor:
        catalog = catalog or SourceTypeCatalog([definition.enum_script_root])
        key_type = catalog.lookup(definition.enum_name, definition.enum_namespace)
        if key_type is None:
            full_name = (
                f"{definition.enum_namespace}.{definition.enum_name}"
                if definition.enum_namespace
                else definition.enum_name
            )
            raise ConfigError(f"Key enum {full_name} was not found. Generate the enum first.")
        if not key_type.is_enum:
            raise TypeShapeError(key_type.full_name, "is not an enum")
        return key_type

    @staticmethod
    def _resolve_key(key_type: TypeDescriptor, file: AssetFile) -> EnumMember:
        safe_name = sanitize(file.name)
        member = key_type.member(safe_name) if safe_name else None
        if member is None:
            raise ResolutionError(safe_name or file.name, key_type.full_name)
        return member


__all__ = ["BindOutcome", "PipelineState", "RegistryPipeline"]
