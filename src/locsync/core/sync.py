from __future__ import annotations

"""
Synchronization Driver.

Orchestrates one pass per target locale: load the reference and target
documents, optionally fill missing keys, merge each patch under the chosen
overwrite policy, optionally resolve remaining entries through a text
dictionary, and write the result. This is the only module of the core with
side effects; the engines it drives are pure.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Sequence

from locsync.core.diff import find_untranslated
from locsync.core.fill import fill_missing
from locsync.core.keypath import count_leaves
from locsync.core.merge import MergeStats, merge_with_stats
from locsync.core.patches import load_patch, patch_from_dictionary, scope_patch, validate_dictionary
from locsync.domain.sync_models import SyncResult, create_error_result, create_success_result
from locsync.domain.tree_models import LocaleTree, build_policy
from locsync.infra import fs

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# SINGLE LOCALE
# -----------------------------------------------------------------------------

def sync_locale(
        reference_path: str,
        target_path: str,
        patch_paths: Optional[Sequence[str]] = None,
        *,
        policy: str = "unconditional",
        fill: bool = False,
        scope: bool = False,
        dictionary_path: Optional[str] = None,
        dry_run: bool = False,
        indent: int = fs.DEFAULT_INDENT,
        sort_keys: bool = False,
) -> SyncResult:
    """
    Run one synchronization pass for a target locale document.

    Args:
        reference_path: Baseline locale document.
        target_path: Locale document to update (may not exist yet).
        patch_paths: Patch documents applied in order (nested or flat).
        policy: 'unconditional' or 'conditional'.
        fill: Copy reference paths missing from the target first.
        scope: Restrict each patch to the current untranslated set.
        dictionary_path: Optional reference-text -> translation dictionary.
        dry_run: Compute everything but write nothing.
        indent: JSON indent width for the written document.
        sort_keys: Sort keys in the written document.

    Returns:
        SyncResult: Counters and status for the pass. I/O and parse errors
                    are reported through ok=False rather than raised.
    """
    reference_path = os.path.abspath(reference_path)
    target_path = os.path.abspath(target_path)
    locale = fs.locale_name(target_path)
    patch_paths = list(patch_paths or [])

    try:
        reference = fs.load_tree(reference_path)
        original = fs.load_tree(target_path, missing_ok=True)
        merge_policy = build_policy(policy, reference)

        tree: LocaleTree = original
        filled = 0
        if fill:
            tree, filled = fill_missing(reference, tree)

        untranslated_before = len(find_untranslated(reference, original))
        stats = MergeStats()

        for patch_path in patch_paths:
            patch = load_patch(fs.load_tree(patch_path))
            if scope:
                patch = scope_patch(patch, find_untranslated(reference, tree))
            tree, patch_stats = merge_with_stats(tree, patch, merge_policy)
            stats += patch_stats
            logger.debug(f"[{locale}] Patch {os.path.basename(patch_path)}: applied={patch_stats.applied}")

        summary: Dict[str, Any] = {"patches": [os.path.abspath(p) for p in patch_paths]}

        if dictionary_path:
            dictionary = validate_dictionary(fs.load_json(dictionary_path))
            resolved = patch_from_dictionary(find_untranslated(reference, tree), dictionary)
            tree, dict_stats = merge_with_stats(tree, resolved.patch, merge_policy)
            stats += dict_stats
            summary["dictionary"] = {
                "path": os.path.abspath(dictionary_path),
                "translated": resolved.translated,
                "skipped": resolved.skipped,
            }

        remaining = find_untranslated(reference, tree).paths()
        changed = tree != original
        written = False

        if changed and not dry_run:
            fs.save_tree(target_path, tree, indent=indent, sort_keys=sort_keys)
            written = True
            logger.info(f"[{locale}] Updated {target_path}")
        elif changed:
            logger.info(f"[{locale}] Dry run: changes not written.")
        else:
            logger.debug(f"[{locale}] No changes needed.")

    except (OSError, ValueError) as e:
        logger.error(f"[{locale}] Synchronization failed: {e}")
        return create_error_result(
            str(e), locale, target_path, reference_path, policy=policy, dry_run=dry_run
        )

    return create_success_result(
        locale,
        target_path,
        reference_path,
        policy=policy,
        dry_run=dry_run,
        written=written,
        total_keys=count_leaves(reference),
        untranslated_before=untranslated_before,
        untranslated_paths=remaining,
        filled=filled,
        applied=stats.applied,
        skipped=stats.skipped,
        conflicts=stats.conflicts,
        summary_extra=summary,
    )


def check_locale(reference_path: str, target_path: str) -> SyncResult:
    """Report the untranslated state of a target without writing anything."""
    return sync_locale(reference_path, target_path, dry_run=True)


def export_untranslated(reference_path: str, target_path: str, output_path: str) -> SyncResult:
    """
    Write the untranslated entries of a target as a JSON list.

    Each record is ``{"key": <dotted path>, "value": <reference value>}``.
    """
    reference_path = os.path.abspath(reference_path)
    target_path = os.path.abspath(target_path)
    locale = fs.locale_name(target_path)

    try:
        reference = fs.load_tree(reference_path)
        target = fs.load_tree(target_path, missing_ok=True)
        entries = find_untranslated(reference, target).to_list()
        fs.save_tree(output_path, [entry.to_dict() for entry in entries])
    except (OSError, ValueError) as e:
        logger.error(f"[{locale}] Export failed: {e}")
        return create_error_result(str(e), locale, target_path, reference_path, dry_run=True)

    logger.info(f"[{locale}] Exported {len(entries)} untranslated key(s) to {output_path}")
    paths = [entry.path for entry in entries]
    return create_success_result(
        locale,
        target_path,
        reference_path,
        dry_run=True,
        total_keys=count_leaves(reference),
        untranslated_before=len(paths),
        untranslated_paths=paths,
        summary_extra={"export_path": os.path.abspath(output_path)},
    )


# -----------------------------------------------------------------------------
# LOCALE DIRECTORIES
# -----------------------------------------------------------------------------

def sync_directory(
        locales_dir: str,
        reference_locale: str = "en",
        *,
        patch_dir: Optional[str] = None,
        **options: Any,
) -> List[SyncResult]:
    """
    Synchronize every locale document of a directory against its reference.

    Locales are processed in file-name order; a failing locale does not stop
    the others. When patch_dir is given, '<code>.json' in that directory is
    applied to the matching locale.

    Args:
        locales_dir: Directory holding '<code>.json' documents.
        reference_locale: Code of the reference document.
        patch_dir: Optional directory of per-locale patches.
        **options: Forwarded to sync_locale.

    Returns:
        List[SyncResult]: One result per target locale.
    """
    reference_path = fs.locale_path(locales_dir, reference_locale)
    results: List[SyncResult] = []

    for target_path in fs.list_locale_files(locales_dir, exclude=[reference_locale]):
        patches: List[str] = []
        if patch_dir:
            candidate = fs.locale_path(patch_dir, fs.locale_name(target_path))
            if os.path.isfile(candidate):
                patches.append(candidate)
        results.append(sync_locale(reference_path, target_path, patches, **options))

    logger.debug(f"Processed {len(results)} locale(s) in {locales_dir}")
    return results


def check_directory(locales_dir: str, reference_locale: str = "en") -> List[SyncResult]:
    """Report every locale of a directory without writing anything."""
    return sync_directory(locales_dir, reference_locale, dry_run=True)
