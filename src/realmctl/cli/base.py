"""Base installation CLI commands."""

import argparse
import warnings

from realmctl.paths import expand


def cmd_init_base(args: argparse.Namespace) -> int:
    from realmctl.base.manifest import scan_and_build_manifest, write_manifest
    from realmctl.base.profile import get_profile

    base_dir = expand(args.path)
    print(f"  Initializing base at: {base_dir}")
    print(f"  Using profile: {args.profile}")

    if not base_dir.exists():
        print(f"ERROR: Directory does not exist: {base_dir}")
        return 1

    try:
        profile = get_profile(args.profile)
        profile.verify_requirements(base_dir)
    except (ValueError, FileNotFoundError) as e:
        print(f"ERROR: {e}")
        return 1
    print("  All required files and directories present")

    layout_warnings = profile.check_warnings(base_dir)
    if layout_warnings:
        print(f"\n  WARNINGS ({len(layout_warnings)}):")
        for w in layout_warnings:
            print(f"    - {w}")

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        manifest = scan_and_build_manifest(base_dir, profile)
    print(f"\n  Found {len(manifest.file_roles)} files/directories")
    print(f"  Computed {len(manifest.checksums)} checksums for immutable files")
    for w in caught:
        print(f"  WARNING: {w.message}")

    manifest_path = write_manifest(manifest, base_dir)
    print(f"  Manifest written to {manifest_path}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    from realmctl.base.manifest import verify_manifest

    base_dir = expand(args.path)
    try:
        result = verify_manifest(base_dir)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"  Base Verification: {len(result['checked'])} checksums checked")
    for rel in result["missing"]:
        print(f"    MISSING {rel}")
    for rel in result["changed"]:
        print(f"    CHANGED {rel}")
    if result["missing"] or result["changed"]:
        return 1
    print("  All checksums match.")
    return 0
