"""Client profiles: required files and the rules that assign file roles.

Roles describe how a path behaves across workspaces:

    executable    main game binary, hard linked
    base_data     immutable archives (common*.MPQ, ...), hard linked and checksummed
    mutable_data  patches and custom content, copied
    user_media    screenshots and videos, shared through symlinks
    user_config   WTF and Interface, shared or private per sharing rules
    ephemeral     Cache, Logs, Errors; recreated empty
    other         anything unmatched, copied
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

EXECUTABLE = "executable"
BASE_DATA = "base_data"
MUTABLE_DATA = "mutable_data"
USER_MEDIA = "user_media"
USER_CONFIG = "user_config"
EPHEMERAL = "ephemeral"
OTHER = "other"

ROLES = [EXECUTABLE, BASE_DATA, MUTABLE_DATA, USER_MEDIA, USER_CONFIG, EPHEMERAL, OTHER]


@dataclass
class RoleRule:
    pattern: str
    role: str
    is_regex: bool = False

    def matches(self, rel_path: str) -> bool:
        if self.is_regex:
            try:
                return re.search(self.pattern, rel_path) is not None
            except re.error:
                return False
        return rel_path == self.pattern or rel_path.startswith(f"{self.pattern}/")


@dataclass
class WarningRule:
    pattern: str
    message: str


@dataclass
class Profile:
    name: str
    version: str
    required_files: list[str] = field(default_factory=list)
    required_dirs: list[str] = field(default_factory=list)
    role_rules: list[RoleRule] = field(default_factory=list)
    warnings: list[WarningRule] = field(default_factory=list)

    def verify_requirements(self, base_dir: Path | str) -> None:
        """Raise FileNotFoundError for the first missing file or directory."""
        base = Path(base_dir)
        for rel in self.required_files:
            if not (base / rel).exists():
                raise FileNotFoundError(f"Required file not found: {rel}")
        for rel in self.required_dirs:
            if not (base / rel).is_dir():
                raise FileNotFoundError(f"Required directory not found: {rel}")

    def check_warnings(self, base_dir: Path | str) -> list[str]:
        base = Path(base_dir)
        return [w.message for w in self.warnings if (base / w.pattern).exists()]

    def classify_path(self, rel_path: str) -> str:
        """Return the role of the first rule matching ``rel_path``, else ``other``."""
        for rule in self.role_rules:
            if rule.matches(rel_path):
                return rule.role
        return OTHER


def _ephemeral_warnings(*names: str) -> list[WarningRule]:
    return [
        WarningRule(name, f"{name} directory present in base - should be ephemeral")
        for name in names
    ]


def _dir_rule(name: str, role: str) -> RoleRule:
    return RoleRule(rf"^{name}($|/)", role, is_regex=True)


def chromie_335a() -> Profile:
    """Wrath of the Lich King 3.3.5a as shipped by ChromieCraft."""
    return Profile(
        name="chromie-3.3.5a",
        version="3.3.5a",
        required_files=[
            "Wow.exe",
            "Data/common.MPQ",
            "Data/patch.MPQ",
            "Data/lichking.MPQ",
        ],
        required_dirs=["Data"],
        role_rules=[
            RoleRule("Wow.exe", EXECUTABLE),
            RoleRule(r"^Data/common.*\.MPQ$", BASE_DATA, is_regex=True),
            RoleRule(r"^Data/expansion.*\.MPQ$", BASE_DATA, is_regex=True),
            RoleRule(r"^Data/lichking.*\.MPQ$", BASE_DATA, is_regex=True),
            RoleRule(r"^Data/patch.*\.MPQ$", MUTABLE_DATA, is_regex=True),
            _dir_rule("Screenshots", USER_MEDIA),
            _dir_rule("WTF", USER_CONFIG),
            _dir_rule("Interface", USER_CONFIG),
            _dir_rule("Cache", EPHEMERAL),
            _dir_rule("Logs", EPHEMERAL),
            _dir_rule("Errors", EPHEMERAL),
        ],
        warnings=_ephemeral_warnings("Cache", "Logs", "Errors"),
    )


def vanilla_112() -> Profile:
    """Vanilla 1.12 client.

    The catch-all MPQ rule comes first, so patch archives classify as
    base_data as well.
    """
    return Profile(
        name="vanilla-1.12",
        version="1.12",
        required_files=["WoW.exe", "realmlist.wtf"],
        required_dirs=["Data", "WTF", "Interface"],
        role_rules=[
            RoleRule("WoW.exe", EXECUTABLE),
            RoleRule(r"^Data/.*\.MPQ$", BASE_DATA, is_regex=True),
            RoleRule(r"^Data/patch.*\.MPQ$", MUTABLE_DATA, is_regex=True),
            _dir_rule("Screenshots", USER_MEDIA),
            _dir_rule("WTF", USER_CONFIG),
            _dir_rule("Interface", USER_CONFIG),
            _dir_rule("Logs", EPHEMERAL),
            _dir_rule("Errors", EPHEMERAL),
            _dir_rule("WDB", EPHEMERAL),
        ],
        warnings=_ephemeral_warnings("Logs", "Errors"),
    )


# Accepted names → builtin profile factory
PROFILE_ALIASES = {
    "chromie-3.3.5a": chromie_335a,
    "3.3.5a": chromie_335a,
    "335": chromie_335a,
    "335a": chromie_335a,
    "vanilla-1.12": vanilla_112,
    "1.12": vanilla_112,
    "112": vanilla_112,
}


def get_profile(name: str) -> Profile:
    factory = PROFILE_ALIASES.get(name)
    if factory is None:
        raise ValueError(
            f"Unknown profile: {name}. Valid: {', '.join(PROFILE_ALIASES)}"
        )
    return factory()
