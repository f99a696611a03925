"""Discovery of resource files that back a registry."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List, Sequence

from .errors import ConfigError
from .logging import get_logger
from .models import AssetFile, Extension

_LOGGER = get_logger("scanner")

# Host bookkeeping files that sit next to every asset.
_EXCLUDED_SUFFIXES = (".meta",)


def _normalise_ignored(folder_names: Sequence[str]) -> set[str]:
    ignored: set[str] = set()
    for name in folder_names:
        if name is None or not name.strip():
            _LOGGER.error("Folder name invalid: %r", name)
            continue
        ignored.add(name.strip().lower())
    return ignored


def _contains_ignored_folder(rel_dir: str, ignored: set[str]) -> bool:
    if not ignored or not rel_dir:
        return False
    return any(part.lower() in ignored for part in rel_dir.split("/"))


def _iter_files(root: Path, extensions: Sequence[Extension], ignored: set[str]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        dirnames[:] = sorted(
            name
            for name in dirnames
            if not _contains_ignored_folder(f"{rel_dir}/{name}" if rel_dir else name, ignored)
        )

        for filename in sorted(filenames):
            if filename.endswith(_EXCLUDED_SUFFIXES):
                continue
            if any(extension.matches(filename) for extension in extensions):
                yield current_dir / filename


class AssetScanner:
    """Walks a folder for files matching extension filters, skipping ignored folders.

    Ignored folder names match whole directory segments below the scan root,
    case-insensitively. Segments of the root path itself are not checked, so
    scanning `Assets/Editor/Audio` with `Editor` ignored still returns its
    files. Results are in sorted walk order so repeated scans of the same tree
    always agree.
    """

    def scan(
        self,
        folder: Path | str,
        extensions: Sequence[Extension],
        ignored_folder_names: Sequence[str] = (),
    ) -> List[Path]:
        if folder is None or not str(folder).strip():
            raise ConfigError("Folder path is required for scanning")
        root_path = Path(folder).expanduser()
        if not root_path.exists():
            raise ConfigError(f"Folder path not found: {folder}")
        if not root_path.is_dir():
            raise ConfigError(f"Folder path is not a directory: {folder}")

        active = [extension for extension in extensions if extension.value]
        if not active:
            raise ConfigError("At least one file extension filter is required")

        ignored = _normalise_ignored(ignored_folder_names)
        paths = list(_iter_files(root_path, active, ignored))
        _LOGGER.debug("Scanner discovered %d files under %s", len(paths), root_path)
        return paths

    def load(self, root: Path | str, paths: Sequence[Path]) -> List[AssetFile]:
        """Load discovered paths as asset files, skipping anything that vanished or is unreadable."""
        root_path = Path(root).expanduser()
        files: List[AssetFile] = []
        for path in paths:
            if not path.is_file() or not os.access(path, os.R_OK):
                _LOGGER.error("Failed to load asset: %s", path)
                continue
            files.append(AssetFile(path=path, relative_path=path.relative_to(root_path).as_posix()))
        return files


def base_names(paths: Sequence[Path]) -> List[str]:
    """Return file names without their extension, in path order."""
    return [path.stem for path in paths]


__all__ = ["AssetScanner", "base_names"]
