from __future__ import annotations

"""
Missing Key Fill.

Adds every reference path absent from a target, using the reference value
as a placeholder. Existing target values are never touched, so filled
entries stay in the untranslated set until a real translation lands.
"""

import copy
import logging
from typing import Tuple

from locsync.core.keypath import count_leaves
from locsync.domain.tree_models import LocaleTree, is_subtree

logger = logging.getLogger(__name__)


def fill_missing(reference: LocaleTree, target: LocaleTree) -> Tuple[LocaleTree, int]:
    """
    Return a copy of the target completed with the reference's missing paths.

    A target leaf sitting where the reference has a subtree is kept as is;
    the reference subtree is not forced into it.

    Args:
        reference: The baseline locale tree.
        target: The locale tree to complete.

    Returns:
        Tuple[LocaleTree, int]: The completed tree and the number of leaves added.
    """
    result = copy.deepcopy(target) if is_subtree(target) else {}
    added = _fill_into(reference, result)
    if added:
        logger.debug(f"Filled {added} missing key(s) from reference.")
    return result, added


def _fill_into(reference: LocaleTree, node: LocaleTree) -> int:
    added = 0
    for key, ref_value in reference.items():
        if key not in node:
            node[key] = copy.deepcopy(ref_value)
            added += count_leaves(ref_value) if is_subtree(ref_value) else 1
        elif is_subtree(ref_value) and is_subtree(node[key]):
            added += _fill_into(ref_value, node[key])
    return added