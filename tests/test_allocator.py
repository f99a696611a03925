"""Tests for stable id allocation."""

from __future__ import annotations

import logging

import pytest

from registrygen.allocator import allocate
from registrygen.models import IdentifierEntry, IdMap


def _map(**ids: int) -> IdMap:
    return IdMap(IdentifierEntry(raw_name=name, safe_name=name, id=value) for name, value in ids.items())


def test_allocate_keeps_surviving_ids_and_extends_past_max() -> None:
    previous = _map(Fire=0, Water=1)

    result = allocate(previous, ["Water", "Earth"])

    assert result.as_dict() == {"Water": 1, "Earth": 2}


def test_allocate_sanitizes_and_numbers_from_zero() -> None:
    result = allocate(IdMap(), ["1Bad", "class"])

    assert result.as_dict() == {"_1Bad": 0, "_class": 1}
    assert [entry.raw_name for entry in result] == ["1Bad", "class"]


def test_allocate_never_reuses_ids_of_removed_names() -> None:
    first = allocate(IdMap(), ["A", "B", "C"])
    second = allocate(first, ["A", "C"])
    third = allocate(second, ["A", "C", "D"])

    assert third.as_dict() == {"A": 0, "C": 2, "D": 3}


def test_allocate_is_stable_across_repeated_runs() -> None:
    names = ["Title", "Battle", "Ending"]
    first = allocate(IdMap(), names)
    second = allocate(first, list(reversed(names)))

    assert second.as_dict() == {"Ending": 2, "Battle": 1, "Title": 0}


def test_allocate_matches_previous_entries_by_safe_name() -> None:
    previous = _map(BossBattle=4)

    result = allocate(previous, ["Boss Battle"])

    assert result.as_dict() == {"BossBattle": 4}


def test_allocate_skips_colliding_and_empty_names(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="registrygen"):
        result = allocate(IdMap(), ["Boss Battle", "BossBattle", "!!!", "", None, "Boss Battle"])

    assert result.as_dict() == {"BossBattle": 0}
    assert any("already used" in record.getMessage() for record in caplog.records)


def test_allocate_with_no_candidates_returns_empty_map(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="registrygen"):
        result = allocate(_map(Fire=0), [])

    assert len(result) == 0
    assert "No enum parameters provided." in caplog.text


def test_allocate_result_ids_are_unique() -> None:
    previous = _map(A=5, B=0)
    result = allocate(previous, ["B", "New1", "A", "New2"])

    ids = [entry.id for entry in result]
    assert len(ids) == len(set(ids))
    assert result.as_dict() == {"B": 0, "New1": 6, "A": 5, "New2": 7}
