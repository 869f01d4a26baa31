"""Repair a workspace's shared links and directories.

Repairs only ever create things: missing shared roots, missing private
directories, missing symlinks and the targets of dangling ones. Anything
the user put where a symlink was expected is reported and left alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from realmctl.base.manifest import load_manifest
from realmctl.paths import shared_dirs
from realmctl.workspace.create import (
    is_under,
    load_workspace_config,
    shared_target,
    user_directories,
)
from realmctl.workspace.sharing import WORKSPACE, strategy_for_role


@dataclass
class FixResult:
    workspace: Path
    actions: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.actions)

    def summary(self) -> str:
        lines = [f"Workspace Fix: {self.workspace}"]
        if self.actions:
            lines.append(f"REPAIRED ({len(self.actions)}):")
            for a in self.actions:
                lines.append(f"  {a}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  {w}")
        if not self.actions and not self.warnings:
            lines.append("Nothing to repair.")
        return "\n".join(lines)


def _fix_private(ws_file: Path, result: FixResult) -> bool:
    """Returns False if the path was left as-is."""
    if ws_file.is_symlink():
        result.warnings.append(f"Expected directory but found a symlink at {ws_file}. Leaving as-is.")
        return False
    if ws_file.is_dir():
        return True
    if ws_file.exists():
        result.warnings.append(f"Expected directory at {ws_file}, but found a file. Leaving as-is.")
        return False
    ws_file.mkdir(parents=True)
    result.actions.append(f"Created missing workspace directory: {ws_file}")
    return True


def _fix_shared(ws_file: Path, target: Path, result: FixResult) -> None:
    if ws_file.is_symlink():
        link = ws_file.readlink()
        resolved = link if link.is_absolute() else ws_file.parent / link
        if not resolved.exists():
            resolved.mkdir(parents=True, exist_ok=True)
            result.actions.append(f"Recreated missing target {resolved} for symlink {ws_file}")
        return

    if ws_file.exists():
        result.warnings.append(
            f"Real file/directory at {ws_file} replaces an expected symlink. "
            "User data was not touched."
        )
        return

    if not target.exists():
        target.mkdir(parents=True)
        result.actions.append(f"Created missing shared directory: {target}")
    ws_file.parent.mkdir(parents=True, exist_ok=True)

    # Creating the target may have made the path reachable through a parent symlink
    if ws_file.exists():
        return

    ws_file.symlink_to(target, target_is_directory=True)
    result.actions.append(f"Created symlink: {ws_file} -> {target}")


def fix_workspace(workspace_path: Path | str) -> FixResult:
    """Recreate missing shared roots, directories and links for a workspace.

    Raises:
        FileNotFoundError: If the workspace or its base manifest is missing.
        ValueError: If either file is malformed.
    """
    ws_path = Path(workspace_path)
    config = load_workspace_config(ws_path)
    result = FixResult(workspace=ws_path)

    global_dir, base_shared_dir = shared_dirs(ws_path.parent, config.base_name)
    for root in (global_dir, base_shared_dir):
        if not root.exists():
            root.mkdir(parents=True)
            result.actions.append(f"Created missing shared root: {root}")

    manifest = load_manifest(config.base_path)

    # Shared directories and anything left as-is are not descended into
    skipped: list[str] = []
    for rel_path, role in user_directories(manifest, config.base_path):
        if is_under(rel_path, skipped):
            continue

        ws_file = ws_path / rel_path
        strategy = strategy_for_role(rel_path, role, config.sharing_rules)
        if strategy == WORKSPACE:
            if not _fix_private(ws_file, result):
                skipped.append(rel_path)
            continue

        skipped.append(rel_path)
        target = shared_target(rel_path, strategy, global_dir, base_shared_dir)
        _fix_shared(ws_file, target, result)

    return result
