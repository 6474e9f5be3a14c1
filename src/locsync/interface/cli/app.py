from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration resolution
(defaults, project file, command-line overrides), dispatch to the
synchronization driver and result rendering.
"""

import argparse
import json
import os
import sys
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

from locsync.core import sync
from locsync.core.validator import validate_config
from locsync.domain.config import get_default_config, load_config
from locsync.domain.sync_models import SyncResult
from locsync.infra.fs import normalize_path
from locsync.infra.logging import LoggingConfig, configure_logging, get_default_log_path, get_logger
from locsync.interface.cli import args as cli_args
from locsync.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing
    parser = cli_args.build_parser()
    args = cli_args.normalize_path_args(parser.parse_args(argv))

    # 2. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    log_file = None
    if args.log_file is not None:
        log_file = normalize_path(args.log_file, get_default_log_path())
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    # 3. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config(args.config_path)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Dispatch
    handler = _COMMANDS[args.command]
    try:
        return handler(args, conf)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = i18n.t("cli.errors.command_failed", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def _cmd_check(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    missing = _missing_paths([args.reference])
    if missing:
        return _report_missing(missing)

    results = [sync.check_locale(args.reference, t) for t in args.targets]
    _render(results, args, show_paths=args.list_paths)
    return _exit_code(results, strict=args.strict)


def _cmd_apply(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    required = [args.reference, *args.patches]
    if args.dictionary:
        required.append(args.dictionary)
    missing = _missing_paths(required)
    if missing:
        return _report_missing(missing)

    result = sync.sync_locale(
        args.reference,
        args.target,
        args.patches,
        policy=conf["policy"],
        fill=conf["fill_missing"],
        scope=conf["scope_patches"],
        dictionary_path=args.dictionary,
        dry_run=conf["dry_run"],
        indent=conf["indent"],
        sort_keys=conf["sort_keys"],
    )
    _render([result], args)
    return _exit_code([result])


def _cmd_fill(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    missing = _missing_paths([args.reference])
    if missing:
        return _report_missing(missing)

    results = [
        sync.sync_locale(
            args.reference,
            target,
            fill=True,
            dry_run=conf["dry_run"],
            indent=conf["indent"],
            sort_keys=conf["sort_keys"],
        )
        for target in args.targets
    ]
    _render(results, args)
    return _exit_code(results)


def _cmd_export(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    missing = _missing_paths([args.reference])
    if missing:
        return _report_missing(missing)

    result = sync.export_untranslated(args.reference, args.target, args.output)
    if args.json_output:
        _print_json([result])
    elif result.ok:
        print(i18n.t(
            "cli.status.exported",
            locale=result.locale,
            count=result.untranslated_after,
            path=result.summary.get("export_path", args.output),
        ))
    else:
        _print_error(result)
    return _exit_code([result])


def _cmd_sync(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    locales_dir = normalize_path(conf["locales_dir"], os.getcwd())
    required = [locales_dir]
    if args.patch_dir:
        required.append(args.patch_dir)
    missing = _missing_paths(required)
    if missing:
        return _report_missing(missing)

    logger.info(f"Targeting locale directory: {locales_dir}")
    results = sync.sync_directory(
        locales_dir,
        conf["reference_locale"],
        patch_dir=args.patch_dir,
        policy=conf["policy"],
        fill=conf["fill_missing"],
        scope=conf["scope_patches"],
        dry_run=conf["dry_run"],
        indent=conf["indent"],
        sort_keys=conf["sort_keys"],
    )
    _render(results, args)
    return _exit_code(results, strict=args.strict)


_COMMANDS: Dict[str, Callable[[argparse.Namespace, Dict[str, Any]], int]] = {
    "check": _cmd_check,
    "apply": _cmd_apply,
    "fill": _cmd_fill,
    "export": _cmd_export,
    "sync": _cmd_sync,
}

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known override keys into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _render(results: List[SyncResult], args: argparse.Namespace, show_paths: bool = False) -> None:
    if args.json_output:
        _print_json(results)
        return
    for result in results:
        _print_human_summary(result, show_paths=show_paths)


def _print_json(results: List[SyncResult]) -> None:
    payload = []
    for r in results:
        item = asdict(r)
        item["translated"] = r.translated
        item["coverage"] = r.coverage
        payload.append(item)
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _print_human_summary(result: SyncResult, show_paths: bool = False) -> None:
    """
    Print one result as terminal lines.

    Args:
        result: The synchronization result to render.
        show_paths: Also list every remaining untranslated path.
    """
    if not result.ok:
        _print_error(result)
        return

    if result.applied or result.filled or result.written:
        key = "cli.status.dry_run" if result.dry_run else "cli.status.updated"
        print(i18n.t(
            key,
            locale=result.locale,
            applied=result.applied,
            skipped=result.skipped,
            filled=result.filled,
        ))

    print(i18n.t(
        "cli.status.report",
        locale=result.locale,
        untranslated=result.untranslated_after,
        total=result.total_keys,
        coverage=result.coverage,
    ))

    if show_paths:
        for path in result.untranslated_paths:
            print(f"  - {path}")


def _print_error(result: SyncResult) -> None:
    print(
        "ERROR: " + i18n.t("cli.errors.locale_failed", locale=result.locale, error=result.error),
        file=sys.stderr,
    )

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _missing_paths(paths: List[str]) -> List[str]:
    return [p for p in paths if not os.path.exists(p)]


def _report_missing(missing: List[str]) -> int:
    for path in missing:
        msg = i18n.t("cli.errors.path_not_exist", path=path)
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
    return EXIT_BAD_INPUT


def _exit_code(results: List[SyncResult], strict: bool = False) -> int:
    if any(not r.ok for r in results):
        return EXIT_FAILURE
    if strict and any(r.untranslated_after for r in results):
        return EXIT_FAILURE
    return EXIT_OK

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
