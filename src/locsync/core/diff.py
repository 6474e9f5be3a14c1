from __future__ import annotations

"""
Untranslated Key Detection (Diff Engine).

Walks a reference tree and a target tree in lock-step and reports every
reference leaf whose target counterpart is either absent or still identical
to the reference value. The reference decides which paths should exist;
paths present only in the target are out of scope and ignored.
"""

import logging
from typing import Any, Dict, Iterator, List

from locsync.core.keypath import join_path
from locsync.domain.tree_models import (
    LocaleTree,
    UntranslatedEntry,
    is_subtree,
    values_equal,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

class UntranslatedKeys:
    """
    Lazy, restartable view over the untranslated entries of a target.

    Every iteration re-walks both trees, so the view always reflects the
    trees it was built from and can be consumed any number of times. Order
    follows the reference tree's key order.
    """

    def __init__(self, reference: LocaleTree, target: LocaleTree):
        self._reference = reference
        self._target = target

    def __iter__(self) -> Iterator[UntranslatedEntry]:
        return _walk(self._reference, self._target, "", ())

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return next(iter(self), None) is not None

    def __contains__(self, path: object) -> bool:
        return any(entry.path == path for entry in self)

    def __repr__(self) -> str:
        return f"UntranslatedKeys(count={len(self)})"

    def paths(self) -> List[str]:
        """Return the dotted paths in reference order."""
        return [entry.path for entry in self]

    def to_list(self) -> List[UntranslatedEntry]:
        """Materialize the entries."""
        return list(self)

    def to_flat_map(self) -> Dict[str, Any]:
        """Return a dotted-path -> reference value mapping."""
        return {entry.path: entry.value for entry in self}


def find_untranslated(reference: LocaleTree, target: LocaleTree) -> UntranslatedKeys:
    """
    Identify the leaves of a target tree that still need translation.

    Args:
        reference: The baseline locale tree.
        target: The locale tree under inspection.

    Returns:
        UntranslatedKeys: Restartable sequence of UntranslatedEntry records.
    """
    return UntranslatedKeys(reference, target)


def count_untranslated(reference: LocaleTree, target: LocaleTree) -> int:
    """Count untranslated leaves without materializing them."""
    return len(find_untranslated(reference, target))


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _walk(
        reference: LocaleTree,
        target: Any,
        prefix: str,
        segments: Tuple[str, ...],
) -> Iterator[UntranslatedEntry]:
    """Recursive generator behind UntranslatedKeys."""
    if not is_subtree(target):
        if target is not None:
            logger.debug(f"Shape conflict at '{prefix}': target leaf where reference has a subtree.")
        target = {}

    for key, ref_value in reference.items():
        path = join_path(prefix, key)
        key_segments = segments + (key,)

        if is_subtree(ref_value):
            yield from _walk(ref_value, target.get(key), path, key_segments)
            continue

        if key not in target or values_equal(target[key], ref_value):
            yield UntranslatedEntry(path=path, value=ref_value, segments=key_segments)
