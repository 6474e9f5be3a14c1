from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (one sub-command per synchronization
operation) and translates parsed namespaces into configuration overrides.
"""

import argparse
import os
from typing import Any, Dict

from locsync.domain.tree_models import POLICY_NAMES
from locsync.infra.fs import normalize_path
from locsync.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the locsync CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    common = _build_common_parser()

    p = argparse.ArgumentParser(
        prog="locsync",
        description=i18n.t("app.description"),
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- check ---
    check = sub.add_parser("check", parents=[common], help=i18n.t("cli.commands.check"))
    check.add_argument("reference", help=i18n.t("cli.args.reference"))
    check.add_argument("targets", nargs="+", help=i18n.t("cli.args.targets"))
    check.add_argument("--list", dest="list_paths", action="store_true", help=i18n.t("cli.args.list"))
    check.add_argument("--strict", action="store_true", help=i18n.t("cli.args.strict"))

    # --- apply ---
    apply = sub.add_parser("apply", parents=[common], help=i18n.t("cli.commands.apply"))
    apply.add_argument("reference", help=i18n.t("cli.args.reference"))
    apply.add_argument("target", help=i18n.t("cli.args.target"))
    apply.add_argument(
        "-p", "--patch",
        dest="patches",
        action="append",
        default=[],
        help=i18n.t("cli.args.patch"),
    )
    apply.add_argument("--dictionary", default=None, help=i18n.t("cli.args.dictionary"))
    _add_merge_options(apply)

    # --- fill ---
    fill = sub.add_parser("fill", parents=[common], help=i18n.t("cli.commands.fill"))
    fill.add_argument("reference", help=i18n.t("cli.args.reference"))
    fill.add_argument("targets", nargs="+", help=i18n.t("cli.args.targets"))
    fill.add_argument("--dry-run", action="store_true", help=i18n.t("cli.args.dry_run"))

    # --- export ---
    export = sub.add_parser("export", parents=[common], help=i18n.t("cli.commands.export"))
    export.add_argument("reference", help=i18n.t("cli.args.reference"))
    export.add_argument("target", help=i18n.t("cli.args.target"))
    export.add_argument("-o", "--output", required=True, help=i18n.t("cli.args.output"))

    # --- sync ---
    sync = sub.add_parser("sync", parents=[common], help=i18n.t("cli.commands.sync"))
    sync.add_argument("locales_dir", nargs="?", default=None, help=i18n.t("cli.args.locales_dir"))
    sync.add_argument(
        "-r", "--reference",
        dest="reference_locale",
        default=None,
        help=i18n.t("cli.args.reference_locale"),
    )
    sync.add_argument("--patch-dir", default=None, help=i18n.t("cli.args.patch_dir"))
    sync.add_argument("--strict", action="store_true", help=i18n.t("cli.args.strict"))
    _add_merge_options(sync)

    return p


def _build_common_parser() -> argparse.ArgumentParser:
    """Options shared by every sub-command."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--debug", action="store_true", help=i18n.t("cli.args.debug"))
    common.add_argument(
        "--log-file",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help=i18n.t("cli.args.log_file"),
    )
    common.add_argument("--config", dest="config_path", default=None, help=i18n.t("cli.args.config"))
    common.add_argument("--use-defaults", action="store_true", help=i18n.t("cli.args.use_defaults"))
    common.add_argument("--dump-config", action="store_true", help=i18n.t("cli.args.dump_config"))
    common.add_argument("--json", dest="json_output", action="store_true", help=i18n.t("cli.args.json"))
    return common


def _add_merge_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--policy",
        choices=POLICY_NAMES,
        default=None,
        help=i18n.t("cli.args.policy"),
    )
    p.add_argument("--scope", action="store_true", help=i18n.t("cli.args.scope"))
    p.add_argument("--fill", action="store_true", help=i18n.t("cli.args.fill"))
    p.add_argument("--dry-run", action="store_true", help=i18n.t("cli.args.dry_run"))

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options the user actually supplied produce an entry, so the
    configuration file keeps its say for everything else.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if getattr(args, "policy", None):
        overrides["policy"] = args.policy
    if getattr(args, "scope", False):
        overrides["scope_patches"] = True
    if getattr(args, "fill", False):
        overrides["fill_missing"] = True
    if getattr(args, "dry_run", False):
        overrides["dry_run"] = True
    if getattr(args, "locales_dir", None):
        overrides["locales_dir"] = args.locales_dir
    if getattr(args, "reference_locale", None):
        overrides["reference_locale"] = args.reference_locale

    return overrides


_PATH_ARGS = ("reference", "target", "output", "dictionary", "patch_dir", "config_path", "locales_dir")
_PATH_LIST_ARGS = ("targets", "patches")


def normalize_path_args(args: argparse.Namespace) -> argparse.Namespace:
    """
    Make every path argument absolute, expanding '~' and environment variables.

    Args:
        args: Parsed command-line arguments, updated in place.

    Returns:
        argparse.Namespace: The same namespace.
    """
    base = os.getcwd()
    for name in _PATH_ARGS:
        value = getattr(args, name, None)
        if value:
            setattr(args, name, normalize_path(value, base))
    for name in _PATH_LIST_ARGS:
        values = getattr(args, name, None)
        if values:
            setattr(args, name, [normalize_path(v, base) for v in values])
    return args
