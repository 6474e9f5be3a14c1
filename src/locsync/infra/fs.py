from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Reads and writes locale documents as UTF-8 JSON, discovers the locale files
of a directory and resolves the per-user data directory. Everything that
touches the disk for a synchronization pass goes through this module.
"""

import json
import os
from typing import Any, List, Optional, Tuple

from locsync.domain.tree_models import LocaleTree

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

LOCALE_EXTENSION = ".json"
APP_DIR_NAME = "locsync"
UNIX_APP_DIR_NAME = ".locsync"
DEFAULT_INDENT = 2

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/locsync
    - Linux/Mac: ~/.locsync

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables and '~'. Reverts to fallback when the
    input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def locale_name(path: str) -> str:
    """Return the locale code of a locale file ('locales/fr.json' -> 'fr')."""
    return os.path.splitext(os.path.basename(path))[0]


def locale_path(locales_dir: str, code: str) -> str:
    """Return the file path of a locale code inside a directory."""
    return os.path.join(locales_dir, f"{code}{LOCALE_EXTENSION}")


def list_locale_files(locales_dir: str, exclude: Optional[List[str]] = None) -> List[str]:
    """
    List the locale documents of a directory, sorted by file name.

    Args:
        locales_dir: Directory holding '<code>.json' files.
        exclude: Locale codes to leave out (typically the reference).

    Returns:
        List[str]: Absolute paths of the matching files.
    """
    skip = set(exclude or [])
    found: List[str] = []
    for name in sorted(os.listdir(locales_dir)):
        full = os.path.join(locales_dir, name)
        if not name.endswith(LOCALE_EXTENSION) or not os.path.isfile(full):
            continue
        if locale_name(name) in skip:
            continue
        found.append(os.path.abspath(full))
    return found


# -----------------------------------------------------------------------------
# DOCUMENT I/O API
# -----------------------------------------------------------------------------

def load_json(path: str) -> Any:
    """Read any JSON document."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_tree(path: str, *, missing_ok: bool = False) -> LocaleTree:
    """
    Read a locale document.

    Args:
        path: File to read.
        missing_ok: Return an empty tree instead of raising when absent.

    Returns:
        LocaleTree: The parsed document.

    Raises:
        FileNotFoundError: When the file is absent and missing_ok is False.
        json.JSONDecodeError: On malformed JSON.
        ValueError: When the document root is not an object.
    """
    if missing_ok and not os.path.exists(path):
        return {}

    data = load_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Locale document root must be an object: {path}")
    return data


def save_tree(
        path: str,
        tree: Any,
        *,
        indent: int = DEFAULT_INDENT,
        sort_keys: bool = False,
) -> None:
    """
    Write a document as pretty-printed UTF-8 JSON with a trailing newline.

    The file is written to a sibling temp file first and then moved into
    place, so an interrupted write never truncates the previous content.
    """
    safe_mkdir(os.path.dirname(os.path.abspath(path)))
    payload = json.dumps(tree, ensure_ascii=False, indent=indent, sort_keys=sort_keys) + "\n"

    tmp_path = f"{path}.tmp"
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(payload)
        os.replace(tmp_path, path)
    except OSError:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
