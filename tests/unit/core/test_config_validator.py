from __future__ import annotations

"""
Unit tests for the Configuration Validator.

Verifies:
1. Type coercion and fallback behavior.
2. Policy alias normalization.
3. Strict mode error raising.
"""

import pytest

from locsync.core.validator import validate_config
from locsync.domain.config import get_default_config


# -----------------------------------------------------------------------------
# BASIC BEHAVIOR
# -----------------------------------------------------------------------------

def test_validate_config_with_defaults_produces_no_warnings() -> None:
    cfg, warnings = validate_config(get_default_config())
    assert warnings == []
    assert cfg["policy"] == "unconditional"
    assert cfg["indent"] == 2


def test_validate_config_not_dict_falls_back_to_defaults() -> None:
    cfg, warnings = validate_config(["not", "a", "dict"])
    assert cfg == get_default_config()
    assert len(warnings) == 1
    assert "Invalid config type" in warnings[0]


def test_validate_config_not_dict_strict_raises() -> None:
    with pytest.raises(TypeError):
        validate_config("bad", strict=True)


def test_unknown_keys_are_dropped() -> None:
    cfg, _ = validate_config({"policy": "conditional", "colour": "blue"})
    assert "colour" not in cfg
    assert cfg["policy"] == "conditional"


# -----------------------------------------------------------------------------
# TYPE COERCION
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("yes", True),
        ("ON", True),
        ("0", False),
        ("off", False),
        (1, True),
        (0, False),
    ],
)
def test_bool_fields_are_coerced(raw, expected) -> None:
    cfg, warnings = validate_config({"fill_missing": raw})
    assert cfg["fill_missing"] is expected
    assert any("fill_missing" in w for w in warnings)


def test_uncoercible_bool_falls_back() -> None:
    cfg, warnings = validate_config({"dry_run": "maybe"})
    assert cfg["dry_run"] is False
    assert any("expected bool" in w for w in warnings)


def test_bool_strict_rejects_strings() -> None:
    with pytest.raises(TypeError):
        validate_config({"sort_keys": "yes"}, strict=True)


def test_blank_string_falls_back() -> None:
    cfg, warnings = validate_config({"reference_locale": "   "})
    assert cfg["reference_locale"] == "en"
    assert warnings == []


def test_non_string_locales_dir_falls_back() -> None:
    cfg, warnings = validate_config({"locales_dir": 42})
    assert cfg["locales_dir"] == get_default_config()["locales_dir"]
    assert any("locales_dir" in w for w in warnings)


@pytest.mark.parametrize("raw, expected", [(4, 4), ("0", 0), (" 3 ", 3)])
def test_indent_accepts_small_ints(raw, expected) -> None:
    cfg, _ = validate_config({"indent": raw})
    assert cfg["indent"] == expected


@pytest.mark.parametrize("raw", [-1, 12, True, "wide", 2.5])
def test_indent_rejects_other_values(raw) -> None:
    cfg, warnings = validate_config({"indent": raw})
    assert cfg["indent"] == 2
    assert any("indent" in w for w in warnings)


def test_indent_strict_raises() -> None:
    with pytest.raises(ValueError):
        validate_config({"indent": 20}, strict=True)


# -----------------------------------------------------------------------------
# POLICY NORMALIZATION
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Unconditional", "unconditional"),
        ("always", "unconditional"),
        ("force", "unconditional"),
        ("conditional", "conditional"),
        ("conditional_on_untranslated", "conditional"),
        ("Conditional-On-Untranslated", "conditional"),
        ("safe", "conditional"),
    ],
)
def test_policy_aliases(raw, expected) -> None:
    cfg, warnings = validate_config({"policy": raw})
    assert cfg["policy"] == expected
    assert warnings == []


def test_unknown_policy_falls_back() -> None:
    cfg, warnings = validate_config({"policy": "sometimes"})
    assert cfg["policy"] == "unconditional"
    assert "Unknown policy" in warnings[0]


def test_unknown_policy_strict_raises() -> None:
    with pytest.raises(ValueError):
        validate_config({"policy": "sometimes"}, strict=True)


def test_non_string_policy_falls_back() -> None:
    cfg, warnings = validate_config({"policy": 3})
    assert cfg["policy"] == "unconditional"
    assert warnings
