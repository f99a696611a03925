"""Helper utilities for constructing throwaway asset folders in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Iterable, Mapping

from registrygen.config import RegistryDefinition
from registrygen.models import Extension


class AssetTreeBuilder:
    """Writes asset and script files under a temporary project root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")

    def touch(self, *relative_paths: str) -> None:
        """Create empty asset files."""
        self.write({relative: "" for relative in relative_paths})

    def path(self, relative: str = "") -> Path:
        return self.root / relative if relative else self.root

    def definition(
        self,
        *,
        name: str = "Music",
        folder: str = "Assets/Audio",
        output: str = "Assets/Scripts",
        enum_name: str = "MusicType",
        enum_namespace: str = "",
        extensions: Iterable[str] = ("wav",),
        **overrides: object,
    ) -> RegistryDefinition:
        """Return a registry definition scanning `folder` and writing to `output`."""
        return RegistryDefinition(
            name=name,
            folder_path=self.root / folder,
            enum_output_path=self.root / output,
            enum_name=enum_name,
            enum_namespace=enum_namespace,
            file_extensions=[Extension(value) for value in extensions],
            **overrides,
        )


__all__ = ["AssetTreeBuilder"]
