from __future__ import annotations

"""
Unit tests for the missing-key fill step.
"""

import copy

from locsync.core.diff import find_untranslated
from locsync.core.fill import fill_missing


def test_fill_adds_missing_paths_only(reference_tree, target_tree) -> None:
    result, added = fill_missing(reference_tree, target_tree)

    assert added == 2
    assert result["profile"] == {
        "title": "Profil",
        "gender": {"label": "Gender", "hint": "Optional"},
    }
    assert result["common"]["save"] == "Enregistrer"
    assert result["legacy"] == "Ancien"


def test_filled_entries_remain_untranslated(reference_tree, target_tree) -> None:
    before = find_untranslated(reference_tree, target_tree).paths()
    result, _ = fill_missing(reference_tree, target_tree)
    assert find_untranslated(reference_tree, result).paths() == before


def test_fill_empty_target_copies_reference(reference_tree) -> None:
    result, added = fill_missing(reference_tree, {})
    assert result == reference_tree
    assert added == 8


def test_fill_keeps_target_leaf_over_reference_subtree() -> None:
    result, added = fill_missing({"menu": {"open": "Open"}}, {"menu": "Menu"})
    assert result == {"menu": "Menu"}
    assert added == 0


def test_fill_does_not_mutate_or_alias(reference_tree, target_tree) -> None:
    target_before = copy.deepcopy(target_tree)
    result, _ = fill_missing(reference_tree, target_tree)

    result["profile"]["gender"]["label"] = "changed"

    assert target_tree == target_before
    assert reference_tree["profile"]["gender"]["label"] == "Gender"


def test_fill_complete_target_is_noop(reference_tree) -> None:
    result, added = fill_missing(reference_tree, copy.deepcopy(reference_tree))
    assert added == 0
    assert result == reference_tree
