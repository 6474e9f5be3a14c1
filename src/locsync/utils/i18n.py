from __future__ import annotations

"""
Internationalization (i18n) Utility.

Singleton message catalog for the command line interface. Messages live in
nested JSON locale files under ``interface/locales`` and are addressed with
dotted keys resolved through the key-path codec.
"""

import json
import logging
import os
from typing import Any, Optional

from locsync.core.keypath import get_path
from locsync.domain.tree_models import LocaleTree

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SYSTEM DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_LOCALE = "en"
LOCALES_REL_PATH = os.path.join("..", "interface", "locales")

# -----------------------------------------------------------------------------
# I18N MANAGER SERVICE
# -----------------------------------------------------------------------------

class I18n:
    """
    Resource manager for locale-specific interface strings.

    Loads one JSON catalog at a time and resolves dotted keys against it,
    falling back to a caller-supplied default or to the key itself.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        """
        Initialize the manager and load the requested locale.

        Args:
            locale: ISO locale identifier (e.g. 'en', 'es').
        """
        self._locale = locale
        self._translations: LocaleTree = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def load_locale(self, locale: str) -> None:
        """
        Load a catalog from the locales directory.

        A missing or corrupted catalog leaves the manager empty, so every
        lookup falls back to defaults.

        Args:
            locale: ISO identifier for the target language.
        """
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.warning(f"I18n: Locale resource missing at '{file_path}'. Fallback active.")
            self._translations = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"I18n: Corruption in locale file {file_path}: {e}")
            self._translations = {}
            self.is_loaded = False
            return

        self._translations = data if isinstance(data, dict) else {}
        self._locale = locale
        self.is_loaded = bool(self._translations)
        logger.debug(f"I18n: Loaded locale catalog: {locale}")

    def t(self, key: str, default: Optional[str] = None, **kwargs: Any) -> str:
        """
        Resolve and format a message by dotted key.

        Args:
            key: Hierarchical identifier (e.g. 'cli.status.updated').
            default: Text used when the key does not resolve to a string.
            **kwargs: Values for str.format interpolation.

        Returns:
            str: The formatted message, the default, or the key itself.
        """
        value = get_path(self._translations, key)
        if not isinstance(value, str):
            value = default if default is not None else key

        if not kwargs:
            return value
        try:
            return value.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: Formatting error for '{key}': {e}")
            return value

# -----------------------------------------------------------------------------
# SERVICE INITIALIZATION
# -----------------------------------------------------------------------------

i18n = I18n(DEFAULT_LOCALE)
