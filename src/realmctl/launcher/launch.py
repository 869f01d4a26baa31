"""Prepare a game directory and spawn the client.

On Linux the client runs through ``launch_cmd`` when configured, otherwise
through wine with a prefix at ``<directory>/.wine``. The command is handed
to ``setsid sh -c`` so the game outlives this process. On Windows the
executable is started directly.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from realmctl.config.loader import GameConfig
from realmctl.launcher.clipboard import to_clipboard

# 3.3.5a layout
INTEGRITY_FILES = ["Battle.net.dll", "Data/lichking.MPQ", "Data/patch-3.MPQ"]
INTEGRITY_DIRS = ["Data"]


@dataclass
class LaunchResult:
    command: str | list[str]
    process: subprocess.Popen
    cache_cleared: bool = False
    password_copied: bool = False


def clear_cache(game_dir: Path | str) -> bool:
    """Remove ``<game_dir>/Cache``. Returns True if something was removed."""
    cache_dir = Path(game_dir) / "Cache"
    if not cache_dir.exists():
        return False
    shutil.rmtree(cache_dir)
    return True


def verify_game_integrity(game_dir: Path | str) -> list[str]:
    """Check a 3.3.5a installation for its required files and directories.

    Returns:
        Missing entries, directories first. Empty when the install is intact.
    """
    game_path = Path(game_dir)
    missing = [d for d in INTEGRITY_DIRS if not (game_path / d).is_dir()]
    missing += [f for f in INTEGRITY_FILES if not (game_path / f).is_file()]
    return missing


def _platform_family(platform: str) -> str:
    if platform.startswith("linux"):
        return "linux"
    if platform in ("win32", "cygwin"):
        return "windows"
    return platform


def build_launch_command(config: GameConfig, platform: str | None = None) -> str | list[str]:
    """Return the shell command (Linux) or argv (Windows) that starts the client."""
    family = _platform_family(platform or sys.platform)
    if family == "linux":
        if config.launch_cmd:
            return config.launch_cmd
        prefix = config.directory / ".wine"
        return f'WINEPREFIX="{prefix}" wine "{config.executable_path}"'
    if family == "windows":
        return [str(config.executable_path)]
    raise RuntimeError(f"Unsupported platform: {family}")


def launch(config: GameConfig, platform: str | None = None) -> LaunchResult:
    """Clear the cache if asked, copy the password, and start the client.

    Raises:
        FileNotFoundError: If the executable is missing.
        RuntimeError: On an unsupported platform.
    """
    cache_cleared = clear_cache(config.directory) if config.clear_cache else False

    if not config.executable_path.exists():
        raise FileNotFoundError(f"Executable not found: {config.executable_path}")

    command = build_launch_command(config, platform)

    copied = to_clipboard(config.password) if config.password else False

    if isinstance(command, str):
        process = subprocess.Popen(
            ["setsid", "sh", "-c", command],
            stdin=subprocess.DEVNULL,
        )
    else:
        process = subprocess.Popen(command, cwd=config.directory)

    return LaunchResult(
        command=command,
        process=process,
        cache_cleared=cache_cleared,
        password_copied=copied,
    )
