"""Workspace module: create, repair, and clean workspaces sharing a base."""

from realmctl.workspace.clean import CleanResult, clean_workspace
from realmctl.workspace.create import (
    WorkspaceConfig,
    create_workspace,
    load_workspace_config,
)
from realmctl.workspace.fix import FixResult, fix_workspace
from realmctl.workspace.sharing import (
    default_sharing_rules,
    determine_strategy,
    parse_share_args,
)

__all__ = [
    "CleanResult",
    "FixResult",
    "WorkspaceConfig",
    "clean_workspace",
    "create_workspace",
    "default_sharing_rules",
    "determine_strategy",
    "fix_workspace",
    "load_workspace_config",
    "parse_share_args",
]
