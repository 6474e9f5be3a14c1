from __future__ import annotations

"""
Locale Tree Merge Engine.

Combines a target tree with a patch tree under an overwrite policy. The
traversal is driven by the patch: keys the patch does not mention are
carried through untouched, and no key is ever removed. Inputs are never
mutated; the result shares no nested objects with either input.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from locsync.core.keypath import join_path
from locsync.domain.tree_models import (
    MISSING,
    ConditionalOnReference,
    LocaleTree,
    OverwritePolicy,
    Unconditional,
    is_subtree,
    values_equal,
)

logger = logging.getLogger(__name__)


@dataclass
class MergeStats:
    """
    Counters collected during a merge.

    Attributes:
        applied: Patch leaves written with a new value.
        skipped: Patch leaves rejected by the conditional policy.
        conflicts: Leaf/subtree shape conflicts resolved in favor of the patch.
    """
    applied: int = 0
    skipped: int = 0
    conflicts: int = 0

    def __iadd__(self, other: "MergeStats") -> "MergeStats":
        self.applied += other.applied
        self.skipped += other.skipped
        self.conflicts += other.conflicts
        return self


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def merge(
        target: LocaleTree,
        patch: LocaleTree,
        policy: Optional[OverwritePolicy] = None,
) -> LocaleTree:
    """
    Merge a patch tree into a copy of the target tree.

    Args:
        target: The locale tree being updated.
        patch: Candidate values; may omit whole subtrees.
        policy: Overwrite policy. Defaults to Unconditional.

    Returns:
        LocaleTree: A new tree holding the union of both key-path sets.
    """
    result, _ = merge_with_stats(target, patch, policy)
    return result


def merge_with_stats(
        target: LocaleTree,
        patch: LocaleTree,
        policy: Optional[OverwritePolicy] = None,
) -> Tuple[LocaleTree, MergeStats]:
    """
    Merge a patch tree and report what happened.

    Args:
        target: The locale tree being updated.
        patch: Candidate values; may omit whole subtrees.
        policy: Overwrite policy. Defaults to Unconditional.

    Returns:
        Tuple[LocaleTree, MergeStats]: The merged tree and its counters.
    """
    active_policy = policy if policy is not None else Unconditional()
    stats = MergeStats()

    result = copy.deepcopy(target) if is_subtree(target) else {}
    reference = active_policy.reference if isinstance(active_policy, ConditionalOnReference) else MISSING
    _merge_into(result, patch, reference, active_policy, "", stats)

    logger.debug(
        f"Merge ({active_policy.name}): applied={stats.applied} "
        f"skipped={stats.skipped} conflicts={stats.conflicts}"
    )
    return result, stats


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _merge_into(
        node: LocaleTree,
        patch: LocaleTree,
        reference_node: Any,
        policy: OverwritePolicy,
        prefix: str,
        stats: MergeStats,
) -> None:
    """
    Apply the patch onto a node that is already a private copy.

    reference_node is the reference subtree at the same position (MISSING
    when the reference has nothing there), walked key by key so keys that
    contain the separator resolve exactly.
    """
    for key, patch_value in patch.items():
        path = join_path(prefix, key)
        current = node.get(key, MISSING)
        reference_value = reference_node.get(key, MISSING) if is_subtree(reference_node) else MISSING

        if is_subtree(patch_value):
            if not is_subtree(current):
                if current is not MISSING:
                    stats.conflicts += 1
                    logger.debug(f"Shape conflict at '{path}': patch subtree replaces target leaf.")
                current = {}
                node[key] = current
            _merge_into(current, patch_value, reference_value, policy, path, stats)
            continue

        if not _may_overwrite(policy, current, reference_value):
            stats.skipped += 1
            continue

        if values_equal(current, patch_value):
            continue

        if is_subtree(current):
            stats.conflicts += 1
            logger.debug(f"Shape conflict at '{path}': patch leaf replaces target subtree.")

        node[key] = copy.deepcopy(patch_value)
        stats.applied += 1


def _may_overwrite(policy: OverwritePolicy, current: Any, reference_value: Any) -> bool:
    """Decide whether a patch leaf may replace the current target value."""
    if isinstance(policy, ConditionalOnReference):
        if current is MISSING:
            return True
        return reference_value is not MISSING and values_equal(current, reference_value)
    return True
