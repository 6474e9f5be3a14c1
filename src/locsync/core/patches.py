from __future__ import annotations

"""
Patch Preparation Helpers.

Turns the raw documents a caller supplies into patch trees ready for the
merge engine: flat dotted maps are expanded, patches can be narrowed to the
untranslated set, and reference-text dictionaries can be turned into
key-addressed patches.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from locsync.core.keypath import SEPARATOR, iter_leaf_segments, tree_from_segments, unflatten
from locsync.domain.tree_models import LocaleTree, UntranslatedEntry, is_subtree, values_equal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DictionaryPatch:
    """
    Result of resolving untranslated entries against a text dictionary.

    Attributes:
        patch: Nested patch tree holding the resolved translations.
        translated: Entries resolved to a different text.
        skipped: Entries without a usable translation.
        missing_texts: Reference texts that had no dictionary entry.
    """
    patch: LocaleTree = field(default_factory=dict)
    translated: int = 0
    skipped: int = 0
    missing_texts: Tuple[str, ...] = ()


# -----------------------------------------------------------------------------
# DOCUMENT NORMALIZATION
# -----------------------------------------------------------------------------

def is_flat_document(document: Mapping[str, Any]) -> bool:
    """A document is flat when any top-level key carries a dotted path."""
    return any(SEPARATOR in key for key in document)


def load_patch(document: Mapping[str, Any]) -> LocaleTree:
    """
    Normalize a patch document into a nested tree.

    Flat documents ('a.b': 'x') are expanded through the key-path codec;
    nested documents are returned as a plain dict.

    A single dotted top-level key makes the whole document flat, so every
    top-level key containing '.' is split. Keys that really contain a dot
    ('v1.0') must sit below a nested parent in a document with no dotted
    top-level keys.
    """
    if is_flat_document(document):
        if any(is_subtree(value) for value in document.values()):
            logger.warning(
                "Patch mixes dotted top-level keys with nested subtrees; "
                "every dotted top-level key is split on '.'."
            )
        logger.debug(f"Expanding flat patch with {len(document)} dotted key(s).")
        return unflatten(document)
    return dict(document)


# -----------------------------------------------------------------------------
# SCOPING
# -----------------------------------------------------------------------------

def scope_patch(patch: LocaleTree, untranslated: Iterable[UntranslatedEntry]) -> LocaleTree:
    """
    Keep only the patch leaves addressing an untranslated path.

    Args:
        patch: Nested patch tree.
        untranslated: Output of the diff engine for the target being patched.

    Returns:
        LocaleTree: A new patch tree limited to untranslated paths.
    """
    allowed = {entry.key_segments for entry in untranslated}
    kept: List[Tuple[Tuple[str, ...], Any]] = []
    dropped = 0

    for segments, value in iter_leaf_segments(patch):
        if segments in allowed:
            kept.append((segments, value))
        else:
            dropped += 1

    if dropped:
        logger.info(f"Scoped patch: kept {len(kept)} leaf(s), dropped {dropped} already translated.")
    return tree_from_segments(kept)


# -----------------------------------------------------------------------------
# TEXT DICTIONARIES
# -----------------------------------------------------------------------------

def patch_from_dictionary(
        untranslated: Iterable[UntranslatedEntry],
        dictionary: Mapping[str, Any],
) -> DictionaryPatch:
    """
    Build a patch by looking up each untranslated reference text.

    The dictionary maps reference-language text to its translation
    ('Save' -> 'Guardar'). Lookups that are missing, non-string or identical
    to the reference text are skipped so they remain untranslated.

    Args:
        untranslated: Entries from the diff engine.
        dictionary: Reference text -> translated text.

    Returns:
        DictionaryPatch: The patch tree and resolution counters.
    """
    resolved: List[Tuple[Tuple[str, ...], str]] = []
    missing = []
    skipped = 0

    for entry in untranslated:
        if not isinstance(entry.value, str):
            skipped += 1
            continue

        translation = dictionary.get(entry.value)
        if translation is None:
            missing.append(entry.value)
            skipped += 1
        elif not isinstance(translation, str) or values_equal(translation, entry.value):
            skipped += 1
        else:
            resolved.append((entry.key_segments, translation))

    return DictionaryPatch(
        patch=tree_from_segments(resolved),
        translated=len(resolved),
        skipped=skipped,
        missing_texts=tuple(dict.fromkeys(missing)),
    )


def validate_dictionary(document: Any) -> Dict[str, str]:
    """
    Check that a dictionary document is a flat text -> text mapping.

    Raises:
        ValueError: When the document is not an object or holds nested values.
    """
    if not is_subtree(document):
        raise ValueError("Translation dictionary must be a JSON object.")
    bad = [k for k, v in document.items() if not isinstance(v, str)]
    if bad:
        raise ValueError(f"Translation dictionary has non-text values for: {', '.join(bad[:5])}")
    return dict(document)
