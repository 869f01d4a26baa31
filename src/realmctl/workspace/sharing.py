"""Sharing strategies for user data in workspaces.

A sharing rule maps a key (a path or a single path component, matched
case-insensitively) to a strategy:

    global     one directory shared by every workspace under the root
    base       one directory per base profile
    workspace  a private directory inside the workspace
"""

from __future__ import annotations

from realmctl.base.profile import USER_CONFIG, USER_MEDIA

GLOBAL = "global"
BASE = "base"
WORKSPACE = "workspace"

STRATEGIES = [GLOBAL, BASE, WORKSPACE]

# Strategy used when no sharing rule matches a directory of this role
ROLE_DEFAULTS = {
    USER_MEDIA: GLOBAL,
    USER_CONFIG: WORKSPACE,
}


def default_sharing_rules() -> dict[str, str]:
    return {
        "screenshots": GLOBAL,
        "interface/addons": BASE,
        "wtf": WORKSPACE,
    }


def parse_share_args(share_args: list[str] | None) -> dict[str, str]:
    """Overlay ``KEY=VALUE`` arguments onto the default rules.

    Keys are lowercased, so ``Screenshots=workspace`` replaces the default
    ``screenshots`` rule. User rules come first in the returned dict and
    therefore take precedence over the defaults they don't replace.
    Arguments without exactly one ``=`` are ignored.

    Raises:
        ValueError: If a value is not a known strategy.
    """
    overrides: dict[str, str] = {}
    for arg in share_args or []:
        parts = arg.split("=")
        if len(parts) != 2:
            continue
        key, value = parts
        if value not in STRATEGIES:
            raise ValueError(
                f"Invalid sharing strategy: {value} "
                f"(valid: {', '.join(STRATEGIES)})"
            )
        overrides[key.strip("/").lower()] = value

    rules = dict(overrides)
    for key, value in default_sharing_rules().items():
        rules.setdefault(key, value)
    return rules


def determine_strategy(rel_path: str, sharing_rules: dict[str, str], default: str) -> str:
    """Return the strategy of the first rule matching ``rel_path``.

    Rules are tried in dict order. A key matches when the path equals it,
    starts with ``key/``, or has a component equal to it, so ``addons``
    matches ``Interface/AddOns``.
    """
    path = rel_path.lower()
    components = path.split("/")
    for key, strategy in sharing_rules.items():
        k = key.strip("/").lower()
        if path == k or path.startswith(f"{k}/") or k in components:
            return strategy
    return default


def strategy_for_role(rel_path: str, role: str, sharing_rules: dict[str, str]) -> str:
    return determine_strategy(rel_path, sharing_rules, ROLE_DEFAULTS.get(role, WORKSPACE))
