from __future__ import annotations

"""
Key-Path Codec.

Converts between dotted key paths ('a.b.c') and positions inside a nested
locale tree. Segments are never escaped: a key that itself contains a dot
cannot be expressed in flat form and must be supplied nested.
"""

import copy
import logging
from typing import Any, Iterable, Iterator, List, Mapping, Tuple

from locsync.domain.tree_models import MISSING, LocaleTree, is_subtree

logger = logging.getLogger(__name__)

SEPARATOR = "."

# -----------------------------------------------------------------------------
# PATH PRIMITIVES
# -----------------------------------------------------------------------------

def join_path(prefix: str, key: str) -> str:
    """Append a key segment to a dotted prefix."""
    return f"{prefix}{SEPARATOR}{key}" if prefix else key


def split_path(path: str) -> List[str]:
    """Split a dotted path into its segments."""
    return path.split(SEPARATOR)


def get_path(tree: Any, path: str) -> Any:
    """
    Resolve a dotted path inside a tree.

    Args:
        tree: Root node to resolve against.
        path: Dotted key path.

    Returns:
        Any: The node at the path, or MISSING when a segment is absent or a
             non-tree node is crossed before the last segment.
    """
    current = tree
    for segment in split_path(path):
        if not is_subtree(current) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def iter_leaf_paths(tree: LocaleTree, prefix: str = "") -> Iterator[Tuple[str, Any]]:
    """
    Yield (path, value) for every leaf of the tree in key order.

    Lists and other non-dict values are opaque leaves. Empty subtrees yield
    nothing.
    """
    for key, value in tree.items():
        path = join_path(prefix, key)
        if is_subtree(value):
            yield from iter_leaf_paths(value, path)
        else:
            yield path, value


def count_leaves(tree: LocaleTree) -> int:
    """Count the leaf entries of a tree."""
    return sum(1 for _ in iter_leaf_paths(tree))


# -----------------------------------------------------------------------------
# SEGMENT-ADDRESSED ACCESS
# -----------------------------------------------------------------------------

def iter_leaf_segments(
        tree: LocaleTree,
        prefix: Tuple[str, ...] = (),
) -> Iterator[Tuple[Tuple[str, ...], Any]]:
    """
    Yield (segments, value) for every leaf of the tree in key order.

    Unlike dotted paths, segment tuples stay exact for keys that contain
    the separator ('v1.0' is one segment, not two).
    """
    for key, value in tree.items():
        segments = prefix + (key,)
        if is_subtree(value):
            yield from iter_leaf_segments(value, segments)
        else:
            yield segments, value


def set_segments(tree: LocaleTree, segments: Tuple[str, ...], value: Any) -> None:
    """Assign a copy of value at segments, creating subtrees on demand."""
    current = tree
    for segment in segments[:-1]:
        node = current.get(segment)
        if not is_subtree(node):
            node = {}
            current[segment] = node
        current = node
    current[segments[-1]] = copy.deepcopy(value)


def tree_from_segments(items: Iterable[Tuple[Tuple[str, ...], Any]]) -> LocaleTree:
    """Build a nested tree from (segments, value) pairs."""
    result: LocaleTree = {}
    for segments, value in items:
        set_segments(result, segments, value)
    return result


# -----------------------------------------------------------------------------
# FLAT -> NESTED
# -----------------------------------------------------------------------------

def unflatten(flat_map: Mapping[str, Any]) -> LocaleTree:
    """
    Build a nested tree from a mapping of dotted keys.

    Intermediate subtrees are created on demand. When a key collides with a
    path already holding a leaf (e.g. both 'a' and 'a.b' are present) the
    last applied entry wins for the conflicting node.

    Args:
        flat_map: Mapping of dotted key path to leaf value.

    Returns:
        LocaleTree: A freshly allocated nested tree.
    """
    result: LocaleTree = {}

    for key, value in flat_map.items():
        segments = split_path(key)
        current = result

        for segment in segments[:-1]:
            node = current.get(segment)
            if not is_subtree(node):
                if segment in current:
                    logger.warning(
                        f"Dotted key '{key}' replaces leaf at segment '{segment}'."
                    )
                node = {}
                current[segment] = node
            current = node

        last = segments[-1]
        if is_subtree(current.get(last)):
            logger.warning(f"Dotted key '{key}' replaces an existing subtree.")
        current[last] = copy.deepcopy(value)

    return result
