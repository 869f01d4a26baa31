"""Tests for the base module: profiles, classification, manifests."""

import pytest
import yaml

from realmctl.base.manifest import (
    compute_file_hash,
    load_manifest,
    scan_and_build_manifest,
    verify_manifest,
    write_manifest,
)
from realmctl.base.profile import (
    BASE_DATA,
    EPHEMERAL,
    EXECUTABLE,
    MUTABLE_DATA,
    OTHER,
    USER_CONFIG,
    USER_MEDIA,
    Profile,
    RoleRule,
    chromie_335a,
    get_profile,
    vanilla_112,
)
from realmctl.paths import MANIFEST_FILENAME


class TestClassification:
    @pytest.mark.parametrize("rel_path,role", [
        ("Wow.exe", EXECUTABLE),
        ("Data/common.MPQ", BASE_DATA),
        ("Data/common-2.MPQ", BASE_DATA),
        ("Data/expansion.MPQ", BASE_DATA),
        ("Data/lichking.MPQ", BASE_DATA),
        ("Data/patch.MPQ", MUTABLE_DATA),
        ("Data/patch-3.MPQ", MUTABLE_DATA),
        ("Screenshots", USER_MEDIA),
        ("Screenshots/WoWScrnShot_001.jpg", USER_MEDIA),
        ("WTF", USER_CONFIG),
        ("Interface/AddOns/SomeAddon", USER_CONFIG),
        ("Cache", EPHEMERAL),
        ("Logs/x.log", EPHEMERAL),
        ("Errors", EPHEMERAL),
        ("Data", OTHER),
        ("ScreenshotsBackup", OTHER),
        ("readme.txt", OTHER),
    ])
    def test_chromie_roles(self, rel_path, role):
        assert chromie_335a().classify_path(rel_path) == role

    def test_vanilla_first_match_wins(self):
        profile = vanilla_112()
        # The catch-all MPQ rule precedes the patch rule
        assert profile.classify_path("Data/patch-2.MPQ") == BASE_DATA
        assert profile.classify_path("Data/dbc.MPQ") == BASE_DATA
        assert profile.classify_path("WDB/creaturecache.wdb") == EPHEMERAL
        assert profile.classify_path("WoW.exe") == EXECUTABLE

    def test_literal_rule_matches_children(self):
        rule = RoleRule("Fonts", OTHER)
        assert rule.matches("Fonts")
        assert rule.matches("Fonts/frizqt.ttf")
        assert not rule.matches("FontsOld")

    def test_invalid_regex_never_matches(self):
        profile = Profile(name="p", version="1", role_rules=[RoleRule("([", EXECUTABLE, is_regex=True)])
        assert profile.classify_path("([") == OTHER


class TestProfiles:
    @pytest.mark.parametrize("name,expected", [
        ("chromie-3.3.5a", "chromie-3.3.5a"),
        ("335", "chromie-3.3.5a"),
        ("335a", "chromie-3.3.5a"),
        ("3.3.5a", "chromie-3.3.5a"),
        ("vanilla-1.12", "vanilla-1.12"),
        ("112", "vanilla-1.12"),
        ("1.12", "vanilla-1.12"),
    ])
    def test_aliases(self, name, expected):
        assert get_profile(name).name == expected

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            get_profile("retail")

    def test_verify_requirements_pass(self, chromie_base):
        chromie_335a().verify_requirements(chromie_base)

    def test_verify_missing_file(self, chromie_base):
        (chromie_base / "Data/lichking.MPQ").unlink()
        with pytest.raises(FileNotFoundError, match="Required file not found: Data/lichking.MPQ"):
            chromie_335a().verify_requirements(chromie_base)

    def test_verify_missing_dir(self, tmp_path):
        (tmp_path / "WoW.exe").write_bytes(b"x")
        (tmp_path / "realmlist.wtf").write_bytes(b"x")
        (tmp_path / "Data").mkdir()
        with pytest.raises(FileNotFoundError, match="Required directory not found: WTF"):
            vanilla_112().verify_requirements(tmp_path)

    def test_warnings(self, chromie_base):
        warnings = chromie_335a().check_warnings(chromie_base)
        assert warnings == ["Cache directory present in base - should be ephemeral"]


class TestManifest:
    def test_crc32_check_value(self, tmp_path):
        path = tmp_path / "check"
        path.write_bytes(b"123456789")
        assert compute_file_hash(path) == "cbf43926"

    def test_crc32_empty_file(self, tmp_path):
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert compute_file_hash(path) == "00000000"

    def test_crc32_spans_chunks(self, tmp_path):
        a = tmp_path / "a"
        b = tmp_path / "b"
        a.write_bytes(b"x" * 20000)
        b.write_bytes(b"x" * 19999 + b"y")
        assert compute_file_hash(a) != compute_file_hash(b)

    def test_scan_roles(self, chromie_base):
        manifest = scan_and_build_manifest(chromie_base, chromie_335a())
        roles = manifest.file_roles
        assert roles["Wow.exe"] == EXECUTABLE
        assert roles["Data"] == OTHER
        assert roles["Data/common.MPQ"] == BASE_DATA
        assert roles["Interface/AddOns/SomeAddon/SomeAddon.toc"] == USER_CONFIG
        assert roles["Cache"] == EPHEMERAL
        assert manifest.profile == "chromie-3.3.5a"
        assert manifest.version == "3.3.5a"
        assert manifest.created_at.isdigit()

    def test_ephemeral_not_descended(self, chromie_base):
        manifest = scan_and_build_manifest(chromie_base, chromie_335a())
        assert "Cache/garbage.bin" not in manifest.file_roles

    def test_manifest_file_not_recorded(self, chromie_base):
        manifest = scan_and_build_manifest(chromie_base, chromie_335a())
        assert (chromie_base / MANIFEST_FILENAME).exists()
        assert MANIFEST_FILENAME not in manifest.file_roles

    def test_checksums_only_for_base_data(self, chromie_base):
        manifest = scan_and_build_manifest(chromie_base, chromie_335a())
        assert set(manifest.checksums) == {"Data/common.MPQ", "Data/lichking.MPQ"}
        assert manifest.checksums["Data/common.MPQ"] == compute_file_hash(chromie_base / "Data/common.MPQ")

    def test_write_and_load(self, chromie_base):
        manifest = scan_and_build_manifest(chromie_base, chromie_335a())
        path = write_manifest(manifest, chromie_base)
        assert path == chromie_base / MANIFEST_FILENAME

        loaded = load_manifest(chromie_base)
        assert loaded.profile == manifest.profile
        assert loaded.base_path == chromie_base
        assert loaded.file_roles == manifest.file_roles
        assert loaded.checksums == manifest.checksums
        assert loaded.created_at == manifest.created_at

    def test_manifest_is_plain_yaml(self, chromie_base):
        data = yaml.safe_load((chromie_base / MANIFEST_FILENAME).read_text())
        assert data["profile"] == "chromie-3.3.5a"
        assert isinstance(data["created_at"], str)

    def test_load_missing_manifest(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_manifest(tmp_path)

    def test_load_non_mapping(self, tmp_path):
        (tmp_path / MANIFEST_FILENAME).write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="not a YAML mapping"):
            load_manifest(tmp_path)

    def test_load_invalid_yaml(self, tmp_path):
        (tmp_path / MANIFEST_FILENAME).write_text("profile: [unclosed\n")
        with pytest.raises(ValueError, match="Failed to parse"):
            load_manifest(tmp_path)

    def test_load_missing_profile(self, tmp_path):
        (tmp_path / MANIFEST_FILENAME).write_text("file_roles: {}\n")
        with pytest.raises(ValueError, match="missing required key 'profile'"):
            load_manifest(tmp_path)

    def test_unreadable_file_skipped_with_warning(self, chromie_base, monkeypatch):
        real_hash = compute_file_hash

        def flaky(path):
            if path.name == "common.MPQ":
                raise PermissionError("denied")
            return real_hash(path)

        monkeypatch.setattr("realmctl.base.manifest.compute_file_hash", flaky)
        with pytest.warns(UserWarning, match="Skipped checksum for Data/common.MPQ"):
            manifest = scan_and_build_manifest(chromie_base, chromie_335a())
        assert manifest.file_roles["Data/common.MPQ"] == BASE_DATA
        assert set(manifest.checksums) == {"Data/lichking.MPQ"}


class TestVerifyManifest:
    def test_clean_base(self, chromie_base):
        result = verify_manifest(chromie_base)
        assert sorted(result["checked"]) == ["Data/common.MPQ", "Data/lichking.MPQ"]
        assert result["missing"] == []
        assert result["changed"] == []

    def test_detects_change_and_loss(self, chromie_base):
        (chromie_base / "Data/common.MPQ").write_bytes(b"tampered")
        (chromie_base / "Data/lichking.MPQ").unlink()
        result = verify_manifest(chromie_base)
        assert result["changed"] == ["Data/common.MPQ"]
        assert result["missing"] == ["Data/lichking.MPQ"]
