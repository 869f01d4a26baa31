"""Scan a base installation and record it in manifest.yaml."""

from __future__ import annotations

import time
import warnings
import zlib
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from realmctl.base.profile import BASE_DATA, EPHEMERAL, Profile
from realmctl.paths import MANIFEST_FILENAME

_CHUNK_SIZE = 8192


@dataclass
class BaseManifest:
    """Roles and checksums for every path of a base installation.

    Paths are relative to ``base_path`` and always use ``/``.
    """

    profile: str
    base_path: Path
    created_at: str
    file_roles: dict[str, str] = field(default_factory=dict)
    checksums: dict[str, str] = field(default_factory=dict)
    version: str | None = None

    def to_dict(self) -> dict:
        return {
            "profile": self.profile,
            "base_path": str(self.base_path),
            "created_at": self.created_at,
            "version": self.version,
            "file_roles": dict(sorted(self.file_roles.items())),
            "checksums": dict(sorted(self.checksums.items())),
        }

    @classmethod
    def from_dict(cls, data: dict) -> BaseManifest:
        return cls(
            profile=data["profile"],
            base_path=Path(data["base_path"]),
            created_at=str(data.get("created_at", "")),
            file_roles=data.get("file_roles") or {},
            checksums=data.get("checksums") or {},
            version=data.get("version"),
        )

    def paths_with_role(self, *roles: str) -> list[str]:
        return sorted(p for p, r in self.file_roles.items() if r in roles)


def compute_file_hash(path: Path | str) -> str:
    """CRC32 of a file as eight lowercase hex digits."""
    crc = 0
    with open(path, "rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            crc = zlib.crc32(chunk, crc)
    return f"{crc & 0xFFFFFFFF:08x}"


def _scan(
    base_dir: Path,
    current: Path,
    profile: Profile,
    file_roles: dict[str, str],
    checksums: dict[str, str],
) -> None:
    for entry in sorted(current.iterdir()):
        rel_path = entry.relative_to(base_dir).as_posix()
        if rel_path == MANIFEST_FILENAME:
            continue

        role = profile.classify_path(rel_path)
        if entry.is_dir():
            file_roles[rel_path] = role
            # Ephemeral trees are recorded but never descended into
            if role != EPHEMERAL:
                _scan(base_dir, entry, profile, file_roles, checksums)
        elif entry.is_file():
            file_roles[rel_path] = role
            if role == BASE_DATA:
                try:
                    checksums[rel_path] = compute_file_hash(entry)
                except OSError as e:
                    warnings.warn(f"Skipped checksum for {rel_path}: {e}", stacklevel=2)


def scan_and_build_manifest(base_dir: Path | str, profile: Profile) -> BaseManifest:
    """Classify every path under ``base_dir`` and checksum its base_data files.

    Unreadable base_data files keep their role but get no checksum; each one
    is reported with ``warnings.warn``.
    """
    base = Path(base_dir)
    file_roles: dict[str, str] = {}
    checksums: dict[str, str] = {}
    _scan(base, base, profile, file_roles, checksums)

    return BaseManifest(
        profile=profile.name,
        base_path=base,
        created_at=str(int(time.time())),
        file_roles=file_roles,
        checksums=checksums,
        version=profile.version,
    )


def write_manifest(manifest: BaseManifest, base_dir: Path | str) -> Path:
    manifest_path = Path(base_dir) / MANIFEST_FILENAME
    with open(manifest_path, "w") as f:
        yaml.safe_dump(manifest.to_dict(), f, sort_keys=False)
    return manifest_path


def load_manifest(base_dir: Path | str) -> BaseManifest:
    """Read ``<base_dir>/manifest.yaml``.

    Raises:
        FileNotFoundError: If the base has no manifest.
        ValueError: If the manifest is not valid YAML, not a mapping, or
            lacks a required key.
    """
    manifest_path = Path(base_dir) / MANIFEST_FILENAME
    with open(manifest_path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse {manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{manifest_path} is not a YAML mapping")

    try:
        return BaseManifest.from_dict(data)
    except KeyError as e:
        raise ValueError(f"{manifest_path} is missing required key {e}") from e


def verify_manifest(base_dir: Path | str) -> dict[str, list[str]]:
    """Recompute base_data checksums against the manifest.

    Returns:
        Dict with: checked, missing, changed (relative paths).
    """
    base = Path(base_dir)
    manifest = load_manifest(base)

    checked: list[str] = []
    missing: list[str] = []
    changed: list[str] = []
    for rel_path, expected in sorted(manifest.checksums.items()):
        path = base / rel_path
        if not path.is_file():
            missing.append(rel_path)
            continue
        checked.append(rel_path)
        if compute_file_hash(path) != expected:
            changed.append(rel_path)

    return {"checked": checked, "missing": missing, "changed": changed}
