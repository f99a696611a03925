"""Tests for registrygen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from registrygen.config import (
    DEFAULT_MENU_NAME,
    RegistryDefinition,
    RegistryGenConfig,
    ScriptRequest,
    load_config,
)
from registrygen.errors import ConfigError
from registrygen.models import EnumMember, Extension


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, RegistryGenConfig)
    assert config.root == tmp_path.resolve()
    assert config.registries == []
    assert config.scripts == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".registrygen.yml"
    config_file.write_text(
        """
registries:
  - name: music
    folder_path: "Assets/Audio"
    enum_output_path: "Assets/Scripts/Generated"
    enum_name: MusicType
    enum_namespace: Game.Audio
    file_extensions: [".wav", mp3]
    ignored_folder_names: [Editor]
    default_names: ["None"]
    value_type: AudioClip
    file_type: AudioClip
    mapping_path: "Registries/music.json"
  - folder_path: "/abs/blocks"
    enum_output_path: "Assets/Blocks"
    enum_name: BlockType
    file_extensions: prefab
scripts:
  - script_name: MusicRegisterObject
    root: "Assets/Music"
    namespace: Game.Music
    key_type: MusicType
    value_type: AudioClip
    file_type: AudioClip
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    music = config.registry("music")
    assert music.folder_path == tmp_path.resolve() / "Assets/Audio"
    assert music.enum_output_path == tmp_path.resolve() / "Assets/Scripts/Generated"
    assert music.enum_namespace == "Game.Audio"
    assert music.file_extensions == [Extension("wav"), Extension("mp3")]
    assert music.ignored_folder_names == ["Editor"]
    assert music.default_names == ["None"]
    assert music.mapping_path == tmp_path.resolve() / "Registries/music.json"
    assert music.resolved_id_map_path == music.enum_output_path / "MusicType.json"

    blocks = config.registry("BlockType")
    assert blocks.folder_path == Path("/abs/blocks")
    assert blocks.file_extensions == [Extension("prefab")]
    assert blocks.mapping_path is None

    (script,) = config.scripts
    assert script.root == tmp_path.resolve() / "Assets/Music"
    assert script.editor_name == "MusicRegisterObjectEditor"
    assert script.editor_path == script.root / "Editor"
    assert script.editor_namespace == "Game.Music.Editor"
    assert script.menu_name == DEFAULT_MENU_NAME
    assert script.file_name == "MusicRegisterObject"


def test_load_config_rejects_shared_outputs(tmp_path: Path) -> None:
    (tmp_path / ".registrygen.yml").write_text(
        """
registries:
  - {name: a, folder_path: A, enum_output_path: Out, enum_name: SharedType, file_extensions: [wav]}
  - {name: b, folder_path: B, enum_output_path: Out, enum_name: SharedType, file_extensions: [wav]}
""",
        encoding="utf-8",
    )

    with pytest.raises(ConfigError, match="both write to"):
        load_config(tmp_path)


def test_load_config_rejects_shared_mapping_path(tmp_path: Path) -> None:
    (tmp_path / ".registrygen.yml").write_text(
        """
registries:
  - {name: a, enum_output_path: OutA, enum_name: AType, mapping_path: Out/shared.json}
  - {name: b, enum_output_path: OutB, enum_name: BType, mapping_path: Out/shared.json}
""",
        encoding="utf-8",
    )

    with pytest.raises(ConfigError, match="both write to"):
        load_config(tmp_path)


def test_load_config_rejects_mapping_path_over_own_id_map(tmp_path: Path) -> None:
    (tmp_path / ".registrygen.yml").write_text(
        """
registries:
  - {name: music, enum_output_path: Out, enum_name: MusicType, mapping_path: Out/MusicType.json}
""",
        encoding="utf-8",
    )

    with pytest.raises(ConfigError, match="more than one output"):
        load_config(tmp_path)


def test_load_config_rejects_duplicate_names(tmp_path: Path) -> None:
    (tmp_path / ".registrygen.yml").write_text(
        """
registries:
  - {name: a, enum_output_path: One, enum_name: OneType}
  - {name: a, enum_output_path: Two, enum_name: TwoType}
""",
        encoding="utf-8",
    )

    with pytest.raises(ConfigError, match="more than once"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "content",
    ["- just\n- a list\n", "registries: {name: a}\n", "registries: [\n", "registries:\n  - 3\n"],
)
def test_load_config_rejects_malformed_files(tmp_path: Path, content: str) -> None:
    (tmp_path / ".registrygen.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_registry_lists_configured_names(tmp_path: Path) -> None:
    config = RegistryGenConfig(root=tmp_path, registries=[RegistryDefinition(name="music")])

    with pytest.raises(ConfigError, match="configured: music"):
        config.registry("blocks")


def test_registry_definition_validate_reports_missing_fields(tmp_path: Path) -> None:
    definition = RegistryDefinition(name="music")
    with pytest.raises(ConfigError, match="folder_path"):
        definition.validate()

    definition.folder_path = tmp_path
    with pytest.raises(ConfigError, match="enum_output_path"):
        definition.validate()

    definition.enum_output_path = tmp_path
    definition.enum_name = "MusicType"
    definition.enum_namespace = "Game.1Audio"
    with pytest.raises(ConfigError, match="enum_namespace"):
        definition.validate()


def test_replace_mapping_clears_previous_entries() -> None:
    definition = RegistryDefinition(name="music")
    definition.mapping[EnumMember("Old", 0)] = "old"

    definition.replace_mapping([(EnumMember("B", 2), "b"), (EnumMember("A", 1), "a")])

    assert list(definition.mapping.items()) == [(EnumMember("B", 2), "b"), (EnumMember("A", 1), "a")]


def test_script_request_defaults_without_namespace(tmp_path: Path) -> None:
    request = ScriptRequest(root=tmp_path, script_name="  ", key_type="K").with_defaults()

    assert request.script_name == "RegisterObject"
    assert request.editor_name == "RegisterObjectEditor"
    assert request.editor_namespace == "Editor"
    assert request.file_name == "RegisterObject"


@pytest.mark.parametrize("file_name", ["MusicType.json", "MusicType.cs"])
def test_registry_definition_validate_rejects_mapping_over_generated_files(
    tmp_path: Path, file_name: str
) -> None:
    definition = RegistryDefinition(
        name="music",
        folder_path=tmp_path,
        enum_output_path=tmp_path / "Out",
        enum_name="MusicType",
        file_extensions=[Extension("wav")],
        mapping_path=tmp_path / "Out" / ".." / "Out" / file_name,
    )

    with pytest.raises(ConfigError, match="is the same file as the"):
        definition.validate()
