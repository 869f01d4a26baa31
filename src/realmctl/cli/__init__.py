"""Unified CLI for realmctl.

Usage:
    realmctl launch <workspace> [--config <path>]
    realmctl list [--config <path>]
    realmctl init-base <path> [--profile chromie-3.3.5a]
    realmctl verify <path>
    realmctl create <workspace> --base <path> [--share KEY=VALUE ...] [--workspace-root <path>]
    realmctl clean <workspace> [--config <path>] [--wdb]
    realmctl fix <workspace> [--config <path>]
"""

import argparse
import sys

from realmctl import __version__
from realmctl.cli.base import cmd_init_base, cmd_verify
from realmctl.cli.launch import cmd_launch, cmd_list
from realmctl.cli.workspace import cmd_clean, cmd_create, cmd_fix
from realmctl.paths import config_path, workspace_root


def _add_config_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", default=None,
        help=f"Path to config.toml (default: {config_path()})",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="realmctl",
        description="WoW client manager - switch realms and share data between clients",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    # launch
    lau = sub.add_parser("launch", help="Point a client at its realm and start it")
    lau.add_argument("workspace", help="Entry to launch (as in your config file)")
    _add_config_arg(lau)

    # list
    ls = sub.add_parser("list", help="List entries of the config file")
    _add_config_arg(ls)

    # init-base
    init = sub.add_parser(
        "init-base", help="Initialize a base installation for workspace creation",
    )
    init.add_argument("path", help="Path to the WoW directory to use as base")
    init.add_argument(
        "--profile", default="chromie-3.3.5a",
        help="Client profile (chromie-3.3.5a, vanilla-1.12)",
    )

    # verify
    ver = sub.add_parser("verify", help="Check a base against its manifest checksums")
    ver.add_argument("path", help="Path to an initialized base")

    # create
    cre = sub.add_parser("create", help="Create a new workspace from a base installation")
    cre.add_argument("workspace", help="Name of the workspace")
    cre.add_argument(
        "--base", required=True,
        help="Path to the base installation (must have manifest.yaml)",
    )
    cre.add_argument(
        "--share", action="append", default=[], metavar="KEY=VALUE",
        help="Sharing rule, e.g. screenshots=global (repeatable)",
    )
    cre.add_argument(
        "--workspace-root", default=None,
        help=f"Workspace root directory (default: {workspace_root()})",
    )

    # clean
    cln = sub.add_parser("clean", help="Remove cache and logs from a workspace")
    cln.add_argument("workspace", help="Entry to clean (as in your config file)")
    _add_config_arg(cln)
    cln.add_argument("--wdb", action="store_true", help="Also remove WDB cache files")

    # fix
    fix = sub.add_parser("fix", help="Repair a workspace's shared links and directories")
    fix.add_argument("workspace", help="Entry to fix (as in your config file)")
    _add_config_arg(fix)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "launch": cmd_launch,
        "list": cmd_list,
        "init-base": cmd_init_base,
        "verify": cmd_verify,
        "create": cmd_create,
        "clean": cmd_clean,
        "fix": cmd_fix,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
