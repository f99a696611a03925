"""Tests for writing generated scripts to disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from registrygen.codegen import Script, save_script, save_script_if_missing
from registrygen.errors import OutputError


def test_script_create_appends_cs_extension(tmp_path: Path) -> None:
    script = Script.create(tmp_path, "MusicType", "public enum MusicType {}\n")

    assert script.path == tmp_path / "MusicType.cs"


def test_save_script_overwrites_and_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "Assets" / "Scripts"
    save_script(Script.create(target, "MusicType", "first\n"))
    path = save_script(Script.create(target, "MusicType", "second\n"))

    assert path.read_text(encoding="utf-8") == "second\n"
    assert sorted(item.name for item in target.iterdir()) == ["MusicType.cs"]


def test_save_script_if_missing_keeps_existing_file(tmp_path: Path) -> None:
    existing = tmp_path / "Tile.cs"
    existing.write_text("hand written\n", encoding="utf-8")

    written = save_script_if_missing(Script.create(tmp_path, "Tile", "generated\n"))

    assert written is False
    assert existing.read_text(encoding="utf-8") == "hand written\n"
    assert save_script_if_missing(Script.create(tmp_path, "Other", "generated\n")) is True


def test_save_script_reports_output_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "blocked"
    blocker.write_text("file, not a folder", encoding="utf-8")

    with pytest.raises(OutputError):
        save_script(Script.create(blocker, "MusicType", "x\n"))
