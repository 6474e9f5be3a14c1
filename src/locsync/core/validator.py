from __future__ import annotations

"""
Configuration Validation Service.

Normalizes a raw configuration dictionary (from the config file or the CLI)
into strictly typed settings before a synchronization pass. Handles type
coercion, policy name normalization and default injection.
"""

import logging
from typing import Any, Dict, List, Tuple

from locsync.domain.config import get_default_config
from locsync.domain.tree_models import POLICY_NAMES

logger = logging.getLogger(__name__)

_POLICY_ALIASES = {
    "always": "unconditional",
    "force": "unconditional",
    "overwrite": "unconditional",
    "conditional-on-untranslated": "conditional",
    "untranslated": "conditional",
    "safe": "conditional",
}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    string_fields = ["locales_dir", "reference_locale"]
    bool_fields = ["fill_missing", "scope_patches", "sort_keys", "dry_run"]

    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["indent"] = _as_indent(merged.get("indent"), defaults["indent"], warnings, strict)
    merged["policy"] = _normalize_policy(merged.get("policy"), defaults["policy"], warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_indent(value: Any, fallback: int, warnings: List[str], strict: bool) -> int:
    """Accept a non-negative indent width."""
    if isinstance(value, bool):
        value = None
    if isinstance(value, str) and value.strip().isdigit() and not strict:
        warnings.append(f"Field 'indent' converted from '{value}' to int.")
        value = int(value.strip())
    if isinstance(value, int) and 0 <= value <= 8:
        return value

    msg = f"Invalid field 'indent': expected int in 0..8, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_policy(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    """Map a policy name or alias onto one of POLICY_NAMES."""
    if not isinstance(value, str) or not value.strip():
        if value is not None:
            msg = f"Invalid field 'policy': expected str, received {type(value).__name__}."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Using fallback.")
        return fallback

    name = value.strip().lower().replace("_", "-")
    name = _POLICY_ALIASES.get(name, name)
    if name in POLICY_NAMES:
        return name

    msg = f"Unknown policy '{value}'. Expected one of: {', '.join(POLICY_NAMES)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
