"""Best-effort clipboard copy through whatever system tool is installed."""

import shutil
import subprocess
import warnings

# Tried in order; the first one found on PATH wins.
CLIPBOARD_TOOLS = [
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["pbcopy"],
    ["clip"],
]


def find_clipboard_tool() -> list[str] | None:
    for cmd in CLIPBOARD_TOOLS:
        if shutil.which(cmd[0]):
            return cmd
    return None


def to_clipboard(text: str) -> bool:
    """Copy ``text`` to the clipboard. Returns False (with a warning) on failure."""
    cmd = find_clipboard_tool()
    if cmd is None:
        warnings.warn("No clipboard tool found (tried wl-copy, xclip, xsel, pbcopy, clip)")
        return False

    try:
        result = subprocess.run(
            cmd, input=text, text=True, timeout=5,
            stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        warnings.warn(f"Failed to write to clipboard: {e}")
        return False

    if result.returncode != 0:
        warnings.warn(f"Failed to write to clipboard: {cmd[0]} exited {result.returncode}")
        return False
    return True
