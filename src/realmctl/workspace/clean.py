"""Remove ephemeral files (cache, logs, WDB) from a game directory."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

EPHEMERAL_DIRS = ["Cache", "Logs", "Errors"]
WDB_SUFFIX = ".wdb"


@dataclass
class CleanResult:
    directory: Path
    removed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return len(self.failed) == 0

    def summary(self) -> str:
        lines = [f"Clean: {self.directory}"]
        for r in self.removed:
            lines.append(f"  removed {r}")
        for f in self.failed:
            lines.append(f"  FAILED  {f}")
        if not self.removed and not self.failed:
            lines.append("No files to clean (workspace is already clean)")
        return "\n".join(lines)


def _is_locale_dir(path: Path) -> bool:
    # enUS, enGB, deDE, ...
    return path.is_dir() and len(path.name) == 4 and path.name.isalpha()


def _wdb_files(data_dir: Path) -> list[Path]:
    if not data_dir.is_dir():
        return []
    files = [p for p in data_dir.iterdir() if p.suffix == WDB_SUFFIX and p.is_file()]
    for locale_dir in filter(_is_locale_dir, data_dir.iterdir()):
        files += [p for p in locale_dir.iterdir() if p.suffix == WDB_SUFFIX and p.is_file()]
    return sorted(files)


def clean_workspace(directory: Path | str, wdb: bool = False) -> CleanResult:
    """Remove Cache, Logs and Errors, plus ``*.wdb`` files when ``wdb`` is set.

    Failures are collected per item rather than raised.
    """
    game_dir = Path(directory)
    result = CleanResult(directory=game_dir)

    for name in EPHEMERAL_DIRS:
        path = game_dir / name
        if not path.exists():
            continue
        try:
            shutil.rmtree(path)
            result.removed.append(name)
        except OSError as e:
            result.failed.append(f"{name}: {e}")

    if wdb:
        for path in _wdb_files(game_dir / "Data"):
            rel = path.relative_to(game_dir).as_posix()
            try:
                path.unlink()
                result.removed.append(rel)
            except OSError as e:
                result.failed.append(f"{rel}: {e}")

    return result
