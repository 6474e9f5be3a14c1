from __future__ import annotations

"""
Unit tests for the synchronization result models.
"""

import dataclasses

import pytest

from locsync.domain.sync_models import SyncResult, create_error_result, create_success_result


def test_success_result_derives_after_count() -> None:
    result = create_success_result(
        "fr",
        "/tmp/fr.json",
        "/tmp/en.json",
        policy="conditional",
        total_keys=8,
        untranslated_before=5,
        untranslated_paths=["common.ok", "units.distanceKm"],
        applied=3,
    )

    assert result.ok is True
    assert result.error == ""
    assert result.untranslated_after == 2
    assert result.translated == 6
    assert result.coverage == 75.0
    assert result.summary == {}


def test_coverage_of_empty_reference_is_complete() -> None:
    result = create_success_result("fr", "t", "r")
    assert result.coverage == 100.0


def test_coverage_is_rounded() -> None:
    result = create_success_result("fr", "t", "r", total_keys=3, untranslated_paths=["a"])
    assert result.coverage == 66.67


def test_error_result() -> None:
    result = create_error_result(
        "boom", "de", "/tmp/de.json", "/tmp/en.json", dry_run=True, summary_extra={"x": 1}
    )

    assert result.ok is False
    assert result.error == "boom"
    assert result.dry_run is True
    assert result.written is False
    assert result.summary == {"x": 1}


def test_result_is_immutable() -> None:
    result = create_success_result("fr", "t", "r")
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.ok = False  # type: ignore[misc]


def test_success_result_copies_paths() -> None:
    paths = ["a"]
    result = create_success_result("fr", "t", "r", untranslated_paths=paths)
    paths.append("b")
    assert result.untranslated_paths == ["a"]
    assert isinstance(result, SyncResult)
