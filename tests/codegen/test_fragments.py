"""Tests for code fragment construction and import composition."""

from __future__ import annotations

import pytest

from registrygen.codegen.fragments import (
    AttributeList,
    ClassFragment,
    EnumFragment,
    ImportList,
)
from registrygen.errors import FragmentError
from registrygen.models import IdentifierEntry


def test_import_list_removes_duplicates_and_blanks() -> None:
    imports = ImportList.of("UnityEngine", " UnityEngine ", "", "System")

    assert list(imports) == ["UnityEngine", "System"]
    assert len(imports) == 2


def test_import_list_compose_keeps_base_first_and_drops_own_namespace() -> None:
    imports = ImportList.compose(
        ("ScriptableRegistry", "UnityEngine"),
        ("Game.Keys", "UnityEngine", "Game.Registries", ""),
        own_namespace="Game.Registries",
    )

    assert list(imports) == ["ScriptableRegistry", "UnityEngine", "Game.Keys"]


def test_import_list_compose_without_namespace_keeps_everything() -> None:
    imports = ImportList.compose(ImportList.of("A"), ImportList.of("B"))

    assert list(imports) == ["A", "B"]


def test_attribute_list_renders_bracketed_names() -> None:
    assert AttributeList.of("System.Serializable").render() == "[System.Serializable]"
    assert AttributeList.of("A", "", "B").render() == "[A, B]"
    assert AttributeList().render() == ""


@pytest.mark.parametrize("name", [None, "", "   "])
def test_fragment_requires_a_name(name) -> None:
    with pytest.raises(FragmentError):
        EnumFragment(name=name)
    with pytest.raises(FragmentError):
        ClassFragment(name=name)


def test_enum_fragment_body_lists_members_in_order() -> None:
    fragment = EnumFragment(
        name="MusicType",
        entries=[
            IdentifierEntry(raw_name="Title", safe_name="Title", id=4),
            IdentifierEntry(raw_name="1Bad", safe_name="_1Bad", id=0),
        ],
    )

    assert fragment.declaration() == "public enum MusicType"
    assert fragment.body() == "Title = 4,\n_1Bad = 0,"


def test_class_fragment_declaration_lists_base_types() -> None:
    fragment = ClassFragment(
        name="MusicRegisterObject",
        base_types=("ScriptableRegistryObjectBase<MusicType, AudioClip>", ""),
    )

    assert (
        fragment.declaration()
        == "public class MusicRegisterObject : ScriptableRegistryObjectBase<MusicType, AudioClip>"
    )
    assert fragment.body() == ""


def test_class_fragment_dedents_content() -> None:
    fragment = ClassFragment(
        name="Holder",
        content="""
            public int Count;
            public string Label;
        """,
    )

    assert fragment.body() == "public int Count;\npublic string Label;"


def test_fragment_coerces_plain_sequences() -> None:
    fragment = ClassFragment(name="Holder", imports=["A", "A", "B"], attributes=["X"])

    assert isinstance(fragment.imports, ImportList)
    assert list(fragment.imports) == ["A", "B"]
    assert fragment.attributes.render() == "[X]"
