"""Create lightweight workspaces from a base installation.

A workspace lives at ``<root>/<name>`` and shares with its base:

- executable and base_data files are hard linked (symlinked when the
  filesystem refuses hard links);
- mutable_data and unclassified files are copied;
- ephemeral directories are created empty;
- user directories become symlinks into ``<root>/.shared/global`` or
  ``<root>/.shared/<profile>``, or private directories, per sharing rules.

User files themselves are never copied; a new workspace starts with empty
user data.
"""

from __future__ import annotations

import os
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from realmctl.base.manifest import BaseManifest, load_manifest
from realmctl.base.profile import (
    BASE_DATA,
    EPHEMERAL,
    EXECUTABLE,
    USER_CONFIG,
    USER_MEDIA,
)
from realmctl.paths import MANIFEST_FILENAME, SHARED_DIRNAME, WORKSPACE_FILENAME, shared_dirs
from realmctl.workspace.sharing import (
    BASE,
    GLOBAL,
    WORKSPACE,
    default_sharing_rules,
    strategy_for_role,
)

USER_ROLES = (USER_MEDIA, USER_CONFIG)


@dataclass
class WorkspaceConfig:
    """Contents of ``workspace.yaml``."""

    name: str
    base_name: str
    base_path: Path
    workspace_path: Path
    created_at: str
    sharing_rules: dict[str, str] = field(default_factory=dict)
    # Filled by create_workspace; not persisted
    link_counts: dict[str, int] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "base_name": self.base_name,
            "base_path": str(self.base_path),
            "workspace_path": str(self.workspace_path),
            "created_at": self.created_at,
            "sharing_rules": dict(self.sharing_rules),
        }

    @classmethod
    def from_dict(cls, data: dict) -> WorkspaceConfig:
        return cls(
            name=data["name"],
            base_name=data["base_name"],
            base_path=Path(data["base_path"]),
            workspace_path=Path(data["workspace_path"]),
            created_at=str(data.get("created_at", "")),
            sharing_rules=data.get("sharing_rules") or {},
        )


def user_directories(manifest: BaseManifest, base_path: Path) -> list[tuple[str, str]]:
    """User-role directories of a base, shallowest first."""
    entries = [
        (rel_path, role)
        for rel_path, role in manifest.file_roles.items()
        if role in USER_ROLES and (base_path / rel_path).is_dir()
    ]
    return sorted(entries, key=lambda e: (e[0].count("/"), e[0]))


def is_under(rel_path: str, prefixes: list[str]) -> bool:
    return any(rel_path.startswith(f"{p}/") for p in prefixes)


def shared_target(
    rel_path: str,
    strategy: str,
    global_dir: Path,
    base_shared_dir: Path,
) -> Path:
    if strategy == GLOBAL:
        return global_dir / rel_path
    if strategy == BASE:
        return base_shared_dir / rel_path
    raise ValueError(f"Strategy '{strategy}' has no shared target")


def create_shared_link(
    rel_path: str,
    workspace_file: Path,
    global_dir: Path,
    base_shared_dir: Path,
    strategy: str,
) -> bool:
    """Materialize one user directory. Returns False if the path already existed."""
    if workspace_file.exists() or workspace_file.is_symlink():
        return False

    if strategy == WORKSPACE:
        workspace_file.mkdir(parents=True)
        return True

    target = shared_target(rel_path, strategy, global_dir, base_shared_dir)
    target.mkdir(parents=True, exist_ok=True)
    workspace_file.parent.mkdir(parents=True, exist_ok=True)
    try:
        workspace_file.symlink_to(target, target_is_directory=True)
    except OSError as e:
        raise OSError(f"Failed to create symlink for {rel_path}: {e}") from e
    return True


def _has_symlink_ancestor(path: Path, stop: Path) -> bool:
    current = path
    while current != stop and current != current.parent:
        if current.is_symlink():
            return True
        current = current.parent
    return False


def _link_immutable(rel_path: str, base_file: Path, workspace_file: Path) -> str:
    try:
        os.link(base_file, workspace_file)
        return "linked"
    except OSError:
        pass
    try:
        workspace_file.symlink_to(base_file)
    except OSError as e:
        raise OSError(f"Failed to link {rel_path}: {e}") from e
    return "symlinked"


def link_workspace_files(
    base_path: Path,
    workspace_path: Path,
    global_dir: Path,
    base_shared_dir: Path,
    manifest: BaseManifest,
    sharing_rules: dict[str, str],
) -> dict[str, int]:
    """Populate a workspace from its base manifest.

    Returns:
        Counts keyed by: linked, symlinked, copied, shared, private, dirs.
    """
    counts = {"linked": 0, "symlinked": 0, "copied": 0, "shared": 0, "private": 0, "dirs": 0}

    # User directories first, so later passes see the symlinks
    shared_prefixes: list[str] = []
    for rel_path, role in user_directories(manifest, base_path):
        if is_under(rel_path, shared_prefixes):
            continue
        strategy = strategy_for_role(rel_path, role, sharing_rules)
        created = create_shared_link(
            rel_path,
            workspace_path / rel_path,
            global_dir,
            base_shared_dir,
            strategy,
        )
        if strategy == WORKSPACE:
            counts["private"] += created
        else:
            counts["shared"] += created
            shared_prefixes.append(rel_path)

    for rel_path, role in sorted(manifest.file_roles.items()):
        if role in USER_ROLES or rel_path in (MANIFEST_FILENAME, WORKSPACE_FILENAME):
            continue

        base_file = base_path / rel_path
        workspace_file = workspace_path / rel_path
        if _has_symlink_ancestor(workspace_file.parent, workspace_path):
            continue
        workspace_file.parent.mkdir(parents=True, exist_ok=True)

        if workspace_file.exists() or workspace_file.is_symlink():
            continue

        if base_file.is_dir():
            workspace_file.mkdir()
            counts["dirs"] += 1
        elif not base_file.is_file():
            continue
        elif role in (EXECUTABLE, BASE_DATA):
            counts[_link_immutable(rel_path, base_file, workspace_file)] += 1
        elif role != EPHEMERAL:
            shutil.copy2(base_file, workspace_file)
            counts["copied"] += 1

    return counts


def create_workspace(
    name: str,
    base_path: Path | str,
    workspace_root: Path | str,
    sharing_rules: dict[str, str] | None = None,
) -> WorkspaceConfig:
    """Create ``<workspace_root>/<name>`` from an initialized base.

    Raises:
        FileNotFoundError: If the base has no manifest.
        FileExistsError: If the workspace already exists.
        ValueError: If the name is not a plain directory name or the
            manifest is malformed.
        OSError: If populating the workspace fails; the partial workspace
            is removed first.
    """
    if not name or name in (".", "..", SHARED_DIRNAME) or "/" in name or "\\" in name:
        raise ValueError(f"Invalid workspace name: '{name}'")

    base = Path(base_path).resolve()
    root = Path(workspace_root).resolve()
    rules = dict(sharing_rules) if sharing_rules is not None else default_sharing_rules()

    try:
        manifest = load_manifest(base)
    except FileNotFoundError:
        raise FileNotFoundError(
            f"Failed to load base manifest from {base} - is this a valid base? "
            "Run 'realmctl init-base' first."
        ) from None

    workspace_path = root / name
    if workspace_path.exists() or workspace_path.is_symlink():
        raise FileExistsError(f"Workspace already exists: {workspace_path}")
    workspace_path.mkdir(parents=True)

    # A failed creation must not leave a half-built workspace behind
    try:
        global_dir, base_shared_dir = shared_dirs(root, manifest.profile)
        global_dir.mkdir(parents=True, exist_ok=True)
        base_shared_dir.mkdir(parents=True, exist_ok=True)

        counts = link_workspace_files(
            base, workspace_path, global_dir, base_shared_dir, manifest, rules,
        )

        config = WorkspaceConfig(
            name=name,
            base_name=manifest.profile,
            base_path=base,
            workspace_path=workspace_path,
            created_at=str(int(time.time())),
            sharing_rules=rules,
            link_counts=counts,
        )
        write_workspace_config(config)
    except Exception:
        shutil.rmtree(workspace_path, ignore_errors=True)
        raise
    return config


def write_workspace_config(config: WorkspaceConfig) -> Path:
    config_path = config.workspace_path / WORKSPACE_FILENAME
    with open(config_path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)
    return config_path


def load_workspace_config(workspace_path: Path | str) -> WorkspaceConfig:
    """Read ``<workspace_path>/workspace.yaml``.

    Raises:
        FileNotFoundError: If the directory is not a workspace.
        ValueError: If the file is not valid YAML, not a mapping, or lacks a
            required key.
    """
    config_path = Path(workspace_path) / WORKSPACE_FILENAME
    with open(config_path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{config_path} is not a YAML mapping")

    try:
        return WorkspaceConfig.from_dict(data)
    except KeyError as e:
        raise ValueError(f"{config_path} is missing required key {e}") from e
