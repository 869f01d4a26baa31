"""Workspace CLI commands."""

import argparse

from realmctl.config.loader import load_config
from realmctl.paths import expand, workspace_root


def cmd_create(args: argparse.Namespace) -> int:
    from realmctl.workspace.create import create_workspace
    from realmctl.workspace.sharing import parse_share_args

    base_path = expand(args.base)
    root = expand(args.workspace_root) if args.workspace_root else workspace_root()
    print(f"  Creating workspace: {args.workspace}")
    print(f"  Base: {base_path}")

    try:
        rules = parse_share_args(args.share)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    print("\n  Sharing rules:")
    for key, value in rules.items():
        print(f"    {key} = {value}")

    try:
        config = create_workspace(args.workspace, base_path, root, rules)
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    counts = config.link_counts
    print(
        f"\n  Linked {counts.get('linked', 0)} files, copied {counts.get('copied', 0)}, "
        f"shared {counts.get('shared', 0)} directories"
    )
    if counts.get("symlinked"):
        print(f"  {counts['symlinked']} files fell back to symlinks (hard links refused)")
    print(f"  Workspace created at: {config.workspace_path}")
    print("\n  Add it to your config.toml to launch it:")
    print(f"    [{config.name}]")
    print(f'    directory = "{config.workspace_path}"')
    return 0


def cmd_clean(args: argparse.Namespace) -> int:
    from realmctl.workspace.clean import clean_workspace

    print(f"  Cleaning workspace: {args.workspace}")
    try:
        game_cfg = load_config(args.config, args.workspace)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    result = clean_workspace(game_cfg.directory, wdb=args.wdb)
    print(result.summary())
    return 0 if result.passed else 1


def cmd_fix(args: argparse.Namespace) -> int:
    from realmctl.workspace.fix import fix_workspace

    print(f"  Fixing workspace: {args.workspace}")
    try:
        game_cfg = load_config(args.config, args.workspace)
        result = fix_workspace(game_cfg.directory)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    print(result.summary())
    print("\n  Fix operations completed (no user data was overridden)")
    return 0
