"""Launch and list CLI commands."""

import argparse
import warnings

from realmctl.config.loader import list_entries, load_config
from realmctl.launcher.launch import launch
from realmctl.launcher.realmlist import write_realmlist


def cmd_launch(args: argparse.Namespace) -> int:
    print(f"  Loading configuration for: {args.workspace}")
    try:
        game_cfg = load_config(args.config, args.workspace)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    if game_cfg.realmlist and game_cfg.realmlist_rel_path:
        try:
            line = write_realmlist(game_cfg.directory, game_cfg.realmlist_rel_path, game_cfg.realmlist)
        except OSError:
            path = game_cfg.directory / game_cfg.realmlist_rel_path
            print(f"ERROR: Realmlist not writable, check path: {path}")
            return 1
        print(f"  Realmlist set to: {line}")

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            result = launch(game_cfg)
        except (RuntimeError, OSError) as e:
            print(f"ERROR: {e}")
            return 1

    if result.cache_cleared:
        print("  Cache directory removed")
    if game_cfg.username:
        print(f"  Account Name: {game_cfg.username}")
    if game_cfg.password:
        print(f"  Password:     {game_cfg.password}")
        if result.password_copied:
            print("  (password copied to clipboard)")
    for w in caught:
        print(f"  WARNING: {w.message}")

    command = result.command if isinstance(result.command, str) else " ".join(result.command)
    print(f"  Launching with command: {command}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    try:
        names = list_entries(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    if not names:
        print("No entries in config.")
        return 0

    print(f"\n  {'Name':<24} {'Directory'}")
    print(f"  {'─' * 60}")
    for name in names:
        try:
            directory = str(load_config(args.config, name).directory)
        except ValueError as e:
            directory = f"(invalid: {e})"
        print(f"  {name:<24} {directory}")
    print(f"\n  {len(names)} entr{'y' if len(names) == 1 else 'ies'}")
    return 0
