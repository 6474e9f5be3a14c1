from __future__ import annotations

"""
Synchronization Domain Data Models.

Defines the result object handed from the synchronization driver to the
interface layer, plus the factories that build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SyncResult:
    """
    Outcome of one synchronization pass over a single target locale.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        locale: Locale code of the target (file stem).
        target_path: Absolute path of the target document.
        reference_path: Absolute path of the reference document.
        policy: Name of the overwrite policy used.
        dry_run: True when nothing was written.
        written: True when the target document was rewritten.
        total_keys: Leaf count of the reference tree.
        untranslated_before: Untranslated leaves before the pass.
        untranslated_after: Untranslated leaves after the pass.
        filled: Leaves added from the reference by the fill step.
        applied: Patch leaves written.
        skipped: Patch leaves rejected by the conditional policy.
        conflicts: Leaf/subtree shape conflicts resolved during merges.
        untranslated_paths: Paths still untranslated after the pass.
        summary: Extra execution metadata (patch files, dictionary stats).
    """
    ok: bool
    error: str

    locale: str
    target_path: str
    reference_path: str
    policy: str = "unconditional"
    dry_run: bool = False
    written: bool = False

    total_keys: int = 0
    untranslated_before: int = 0
    untranslated_after: int = 0

    filled: int = 0
    applied: int = 0
    skipped: int = 0
    conflicts: int = 0

    untranslated_paths: List[str] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def translated(self) -> int:
        """Leaves of the reference that are no longer untranslated."""
        return self.total_keys - self.untranslated_after

    @property
    def coverage(self) -> float:
        """Translated share of the reference, in percent."""
        if not self.total_keys:
            return 100.0
        return round(100.0 * self.translated / self.total_keys, 2)


# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        locale: str,
        target_path: str,
        reference_path: str,
        policy: str = "unconditional",
        dry_run: bool = False,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> SyncResult:
    """
    Create a failed synchronization result.

    Args:
        error: Detailed error description.
        locale: Target locale code.
        target_path: Target document path.
        reference_path: Reference document path.
        policy: Overwrite policy name.
        dry_run: Whether the pass was a simulation.
        summary_extra: Additional metadata.

    Returns:
        SyncResult: An immutable error result object.
    """
    return SyncResult(
        ok=False,
        error=error,
        locale=locale,
        target_path=target_path,
        reference_path=reference_path,
        policy=policy,
        dry_run=dry_run,
        summary=summary_extra or {},
    )


def create_success_result(
        locale: str,
        target_path: str,
        reference_path: str,
        *,
        policy: str = "unconditional",
        dry_run: bool = False,
        written: bool = False,
        total_keys: int = 0,
        untranslated_before: int = 0,
        untranslated_paths: Optional[List[str]] = None,
        filled: int = 0,
        applied: int = 0,
        skipped: int = 0,
        conflicts: int = 0,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> SyncResult:
    """
    Create a successful synchronization result.

    The 'after' count is derived from the remaining untranslated paths.
    """
    paths = list(untranslated_paths or [])
    return SyncResult(
        ok=True,
        error="",
        locale=locale,
        target_path=target_path,
        reference_path=reference_path,
        policy=policy,
        dry_run=dry_run,
        written=written,
        total_keys=total_keys,
        untranslated_before=untranslated_before,
        untranslated_after=len(paths),
        filled=filled,
        applied=applied,
        skipped=skipped,
        conflicts=conflicts,
        untranslated_paths=paths,
        summary=summary_extra or {},
    )
