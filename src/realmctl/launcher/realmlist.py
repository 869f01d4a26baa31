"""Point a client at a realm server."""

from pathlib import Path


def format_realmlist(realmlist: str) -> str:
    return f"set realmlist to {realmlist}"


def write_realmlist(game_dir: Path | str, rel_path: str, realmlist: str) -> str:
    """Overwrite the realmlist file under ``game_dir``.

    Returns:
        The line that was written.

    Raises:
        OSError: If the file can't be written (missing directory, permissions).
    """
    line = format_realmlist(realmlist)
    (Path(game_dir) / rel_path).write_text(line)
    return line
