from __future__ import annotations

"""
Locale Tree Domain Models.

Defines the structural vocabulary shared by the synchronization engines:
the recursive locale tree alias, the untranslated entry record and the
overwrite policies consumed by the merge engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Union

# -----------------------------------------------------------------------------
# TREE PRIMITIVES
# -----------------------------------------------------------------------------

# Values are str leaves, nested trees, or opaque leaves (lists, numbers, ...)
LocaleTree = Dict[str, Any]


class _Missing:
    """Sentinel for a key path that does not exist in a tree."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def is_subtree(value: Any) -> bool:
    """Return True when the value is a traversable tree node."""
    return isinstance(value, dict)


def values_equal(left: Any, right: Any) -> bool:
    """Strict leaf equality: same type and equal value (so 1 != True)."""
    return type(left) is type(right) and left == right


# -----------------------------------------------------------------------------
# DIFF RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class UntranslatedEntry:
    """
    A reference leaf whose target counterpart is missing or still identical.

    Attributes:
        path: Dotted key path of the leaf (e.g. 'common.save').
        value: The reference value at that path.
        segments: Exact key segments of the leaf. The dotted path is ambiguous
                  for keys containing '.', the segments never are. Empty when
                  the entry was built from a path alone.
    """
    path: str
    value: Any
    segments: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def key_segments(self) -> Tuple[str, ...]:
        """Exact segments, or the dotted path split when none were recorded."""
        return self.segments or tuple(self.path.split("."))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the export record format."""
        return {"key": self.path, "value": self.value}


# -----------------------------------------------------------------------------
# OVERWRITE POLICIES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Unconditional:
    """Patch leaves always replace target leaves."""

    name: str = field(default="unconditional", init=False)


@dataclass(frozen=True)
class ConditionalOnReference:
    """
    Patch leaves replace target leaves only while they are untranslated.

    A target leaf is untranslated when it is absent or equal to the
    reference leaf at the same path.

    Attributes:
        reference: The baseline locale tree used for the comparison.
    """
    reference: LocaleTree = field(compare=False)
    name: str = field(default="conditional", init=False)


OverwritePolicy = Union[Unconditional, ConditionalOnReference]

POLICY_NAMES = ("unconditional", "conditional")


def build_policy(name: str, reference: LocaleTree | None = None) -> OverwritePolicy:
    """
    Construct an overwrite policy from its configuration name.

    Args:
        name: 'unconditional' or 'conditional'.
        reference: Required for the conditional policy.

    Returns:
        OverwritePolicy: The policy instance.

    Raises:
        ValueError: On an unknown name or a missing reference.
    """
    key = (name or "").strip().lower()
    if key == "unconditional":
        return Unconditional()
    if key == "conditional":
        if reference is None:
            raise ValueError("The conditional policy requires a reference tree.")
        return ConditionalOnReference(reference)
    raise ValueError(f"Unknown overwrite policy: {name!r}")
