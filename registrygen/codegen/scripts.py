"""Generated script files and the helpers that write them to disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..fileio import atomic_write_text
from ..logging import get_logger
from ..models import Extension

_LOGGER = get_logger("codegen.scripts")

CS_EXTENSION = Extension("cs")


@dataclass(frozen=True)
class Script:
    """A rendered source file destined for ``root/<name>.cs``."""

    name: str
    path: Path
    contents: str

    @classmethod
    def create(cls, root: Path, name: str, contents: str) -> "Script":
        return cls(name=name, path=Path(root) / CS_EXTENSION.to_file_name(name), contents=contents)


def save_script(script: Script) -> Path:
    """Write the script, overwriting any existing file."""
    atomic_write_text(script.path, script.contents)
    _LOGGER.info("Create Script: %s", script.path)
    return script.path


def save_script_if_missing(script: Script) -> bool:
    """Write the script only when no file exists yet; return True when written."""
    if script.path.exists():
        _LOGGER.info("Script already exists: %s", script.path)
        return False
    save_script(script)
    return True


__all__ = ["CS_EXTENSION", "Script", "save_script", "save_script_if_missing"]
