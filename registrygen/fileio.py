"""Atomic text writes for generated artifacts."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import OutputError


def atomic_write_text(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` via a sibling temp file so readers never see a partial file."""
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(content, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            tmp_path.unlink()
        except OSError:
            pass
        raise OutputError(f"Failed to write {path}: {exc}") from exc


__all__ = ["atomic_write_text"]
