from __future__ import annotations

"""
Unit tests for Internationalization (i18n) consistency.

Ensures that all locale catalogs (en.json, es.json) share the exact
same key structure and dot-notation resolution works as expected.
"""

import json
import os

import pytest

from locsync.core.keypath import iter_leaf_paths
from locsync.utils.i18n import I18n

LOCALES_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "src", "locsync", "interface", "locales")
)


def _load(lang: str):
    with open(os.path.join(LOCALES_DIR, f"{lang}.json"), "r", encoding="utf-8") as f:
        return json.load(f)


def test_locales_key_parity() -> None:
    """TC-01: Verify that EN and ES catalogs have identical keys."""
    en_keys = {path for path, _ in iter_leaf_paths(_load("en"))}
    es_keys = {path for path, _ in iter_leaf_paths(_load("es"))}

    assert not en_keys - es_keys, f"Keys present in EN but missing in ES: {en_keys - es_keys}"
    assert not es_keys - en_keys, f"Keys present in ES but missing in EN: {es_keys - en_keys}"


@pytest.mark.parametrize("lang", ["en", "es"])
def test_catalog_placeholders_match(lang) -> None:
    """Placeholders used by the controller exist in every catalog."""
    i18n = I18n(lang)
    text = i18n.t("cli.status.report", locale="fr", untranslated=1, total=2, coverage=50.0)
    assert "fr" in text and "50.0" in text


def test_resolution_and_fallbacks() -> None:
    i18n = I18n("en")

    assert i18n.is_loaded is True
    assert i18n.t("cli.errors.path_not_exist", path="/x") == "Path does not exist: /x"
    assert i18n.t("cli.unknown.key") == "cli.unknown.key"
    assert i18n.t("cli.unknown.key", default="Fallback") == "Fallback"
    # A subtree is not a message
    assert i18n.t("cli.status") == "cli.status"


def test_missing_format_argument_returns_raw_text() -> None:
    i18n = I18n("en")
    assert i18n.t("cli.errors.path_not_exist", other="x") == "Path does not exist: {path}"


def test_unknown_locale_falls_back_to_keys() -> None:
    i18n = I18n("xx")
    assert i18n.is_loaded is False
    assert i18n.t("app.description") == "app.description"
