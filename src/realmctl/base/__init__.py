"""Base module: profiles, file classification, and base manifests."""

from realmctl.base.manifest import (
    BaseManifest,
    compute_file_hash,
    load_manifest,
    scan_and_build_manifest,
    verify_manifest,
    write_manifest,
)
from realmctl.base.profile import Profile, RoleRule, WarningRule, get_profile

__all__ = [
    "BaseManifest",
    "Profile",
    "RoleRule",
    "WarningRule",
    "compute_file_hash",
    "get_profile",
    "load_manifest",
    "scan_and_build_manifest",
    "verify_manifest",
    "write_manifest",
]
