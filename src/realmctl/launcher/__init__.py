"""Launcher module: realmlist, cache, credentials, and process spawn."""

from realmctl.launcher.launch import (
    build_launch_command,
    clear_cache,
    launch,
    verify_game_integrity,
)
from realmctl.launcher.realmlist import write_realmlist

__all__ = [
    "build_launch_command",
    "clear_cache",
    "launch",
    "verify_game_integrity",
    "write_realmlist",
]
