from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared locale trees and an on-disk locale directory used across tests.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


def write_json(path: Path, data: Any) -> Path:
    """Write a JSON document the way locale files are stored."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return path


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def reference_tree() -> Dict[str, Any]:
    """
    Return a small English reference locale.

    Covers nested subtrees, an interpolation token and an opaque list leaf.
    """
    return {
        "common": {
            "save": "Save",
            "cancel": "Cancel",
            "ok": "OK",
        },
        "units": {
            "distanceKm": "{{distance}} km",
        },
        "profile": {
            "title": "Profile",
            "gender": {
                "label": "Gender",
                "hint": "Optional",
            },
        },
        "weekdays": ["Mon", "Tue"],
    }


@pytest.fixture
def target_tree() -> Dict[str, Any]:
    """
    Return a partially translated French locale matching reference_tree.

    'common.cancel' and 'common.ok' still mirror the reference, 'profile.gender'
    is missing entirely and 'legacy' is an out-of-schema key.
    """
    return {
        "common": {
            "save": "Enregistrer",
            "cancel": "Cancel",
            "ok": "OK",
        },
        "units": {
            "distanceKm": "{{distance}} km",
        },
        "profile": {
            "title": "Profil",
        },
        "weekdays": ["Lun", "Mar"],
        "legacy": "Ancien",
    }


@pytest.fixture
def locales_dir(tmp_path: Path, reference_tree: Dict[str, Any], target_tree: Dict[str, Any]) -> Path:
    """
    Create an on-disk locale directory.

    Structure:
    /locales
      en.json   (reference)
      fr.json   (partial translation)
      de.json   (empty object)
      notes.txt (ignored)
    """
    root = tmp_path / "locales"
    write_json(root / "en.json", reference_tree)
    write_json(root / "fr.json", target_tree)
    write_json(root / "de.json", {})
    (root / "notes.txt").write_text("not a locale", encoding="utf-8")
    return root
