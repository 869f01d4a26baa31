"""Shared test fixtures for realmctl."""

from pathlib import Path

import pytest

from realmctl.base.manifest import scan_and_build_manifest, write_manifest
from realmctl.base.profile import chromie_335a, vanilla_112


def build_chromie_base(base_dir: Path) -> Path:
    """Lay out a minimal 3.3.5a client and write its manifest."""
    for d in ["Data", "Screenshots", "WTF", "Interface/AddOns/SomeAddon", "Interface/Icons", "Cache"]:
        (base_dir / d).mkdir(parents=True, exist_ok=True)

    (base_dir / "Wow.exe").write_bytes(b"mock executable")
    (base_dir / "Data/common.MPQ").write_bytes(b"mock data file")
    (base_dir / "Data/patch.MPQ").write_bytes(b"mock patch file")
    (base_dir / "Data/lichking.MPQ").write_bytes(b"mock expansion data")
    (base_dir / "Screenshots/WoWScrnShot_001.jpg").write_bytes(b"mock screenshot")
    (base_dir / "WTF/Config.wtf").write_bytes(b"mock config")
    (base_dir / "Interface/AddOns/SomeAddon/SomeAddon.toc").write_bytes(b"mock addon")
    (base_dir / "Cache/garbage.bin").write_bytes(b"cache")
    (base_dir / "readme.txt").write_text("hello")

    write_manifest(scan_and_build_manifest(base_dir, chromie_335a()), base_dir)
    return base_dir


def build_vanilla_base(base_dir: Path) -> Path:
    """Lay out a minimal 1.12 client and write its manifest."""
    for d in ["Data", "Screenshots", "WTF/Account", "Interface/AddOns/SomeAddon", "Logs", "WDB"]:
        (base_dir / d).mkdir(parents=True, exist_ok=True)

    (base_dir / "WoW.exe").write_bytes(b"mock executable")
    (base_dir / "realmlist.wtf").write_bytes(b"mock realmlist")
    for name in ["base.MPQ", "dbc.MPQ", "interface.MPQ", "patch.MPQ", "patch-2.MPQ"]:
        (base_dir / "Data" / name).write_bytes(b"mock data " + name.encode())
    (base_dir / "WTF/Config.wtf").write_bytes(b"mock config")
    (base_dir / "Interface/AddOns/SomeAddon/SomeAddon.toc").write_bytes(b"mock addon")

    write_manifest(scan_and_build_manifest(base_dir, vanilla_112()), base_dir)
    return base_dir


@pytest.fixture
def chromie_base(tmp_path):
    base = tmp_path / "base"
    base.mkdir()
    return build_chromie_base(base)


@pytest.fixture
def vanilla_base(tmp_path):
    base = tmp_path / "base112"
    base.mkdir()
    return build_vanilla_base(base)


@pytest.fixture
def workspace_root(tmp_path):
    root = tmp_path / "workspaces"
    root.mkdir()
    return root


@pytest.fixture
def game_dir(tmp_path):
    """A plain game directory with an executable and a realmlist location."""
    game = tmp_path / "game"
    (game / "Data" / "enUS").mkdir(parents=True)
    (game / "Wow.exe").write_bytes(b"mock executable")
    return game


@pytest.fixture
def config_file(tmp_path, game_dir):
    path = tmp_path / "config.toml"
    path.write_text(
        f"""
[Chromie]
directory = "{game_dir}"
realmlist_rel_path = "Data/enUS/realmlist.wtf"
realmlist = "logon.chromiecraft.com"
launch_cmd = "true"
username = "arthas"
password = "frostmourne"
clear_cache = true

[Vanilla]
directory = "~/Games/vanilla"
executable = "WoW.exe"
realmlist_rel_path = "realmlist.wtf"
realmlist = "logon.example.org"
"""
    )
    return path
