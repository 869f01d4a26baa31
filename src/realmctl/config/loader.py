"""Load game entries from config.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from realmctl.paths import config_path, expand

DEFAULT_EXECUTABLE = "Wow.exe"


@dataclass
class GameConfig:
    """One named entry of the config file."""

    name: str
    directory: Path
    executable: str = DEFAULT_EXECUTABLE
    realmlist_rel_path: str | None = None
    realmlist: str | None = None
    launch_cmd: str | None = None
    username: str | None = None
    password: str | None = None
    clear_cache: bool = False

    @property
    def executable_path(self) -> Path:
        return self.directory / self.executable


def _read_entries(path: Path | str | None) -> tuple[Path, dict]:
    cfg_path = expand(path) if path else config_path()
    try:
        with open(cfg_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Config file not found: {path or cfg_path}") from None
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Failed to parse config file {cfg_path}: {e}") from e
    return cfg_path, data


def list_entries(path: Path | str | None = None) -> list[str]:
    """Return the names of every table in the config file, in file order."""
    _, data = _read_entries(path)
    return [key for key, value in data.items() if isinstance(value, dict)]


def load_config(path: Path | str | None, name: str) -> GameConfig:
    """Load a single game entry.

    The entry name is matched case-insensitively. Only ``~`` is expanded in
    ``directory``.

    Args:
        path: Path to config.toml. Defaults to the REALMCTL_CONFIG location.
        name: Entry to load.

    Returns:
        The matching GameConfig.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the file is malformed or the entry is missing.
    """
    cfg_path, data = _read_entries(path)

    match = next(
        ((key, value) for key, value in data.items() if key.lower() == name.lower()),
        None,
    )
    if match is None:
        raise ValueError(f"Config with key '{name}' not found (case-insensitive)")

    key, raw = match
    if not isinstance(raw, dict):
        raise ValueError(f"Config entry '{key}' in {cfg_path} is not a table")
    if "directory" not in raw:
        raise ValueError(f"Config entry '{key}' is missing 'directory'")

    return GameConfig(
        name=key,
        directory=expand(raw["directory"]),
        executable=raw.get("executable", DEFAULT_EXECUTABLE),
        realmlist_rel_path=raw.get("realmlist_rel_path"),
        realmlist=raw.get("realmlist"),
        launch_cmd=raw.get("launch_cmd"),
        username=raw.get("username"),
        password=raw.get("password"),
        clear_cache=bool(raw.get("clear_cache", False)),
    )
