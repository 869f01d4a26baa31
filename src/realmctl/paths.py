"""Default path resolution.

Resolves canonical locations for the config file and the workspace root.
Uses environment variables when available, falls back to conventional
defaults.

Environment variables:
    REALMCTL_CONFIG: game config file (default: ~/.config/realmctl/config.toml)
    REALMCTL_WORKSPACE_ROOT: workspace root (default: ~/.local/share/wow_workspaces)
"""

from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_CONFIG = "~/.config/realmctl/config.toml"
_DEFAULT_WORKSPACE_ROOT = "~/.local/share/wow_workspaces"

MANIFEST_FILENAME = "manifest.yaml"
WORKSPACE_FILENAME = "workspace.yaml"
SHARED_DIRNAME = ".shared"
GLOBAL_SHARED_NAME = "global"


def expand(path: Path | str) -> Path:
    """Expand a leading ``~``. Environment variables are left alone."""
    return Path(path).expanduser()


def config_path() -> Path:
    """Return the path to the game config file."""
    return expand(os.environ.get("REALMCTL_CONFIG", _DEFAULT_CONFIG))


def workspace_root() -> Path:
    """Return the directory new workspaces are created under."""
    return expand(os.environ.get("REALMCTL_WORKSPACE_ROOT", _DEFAULT_WORKSPACE_ROOT))


def shared_dirs(root: Path, base_name: str) -> tuple[Path, Path]:
    """Return the (global, per-base) shared directories under a workspace root."""
    shared = root / SHARED_DIRNAME
    return shared / GLOBAL_SHARED_NAME, shared / base_name
