"""Desktop side effects: open a browser tab, write the clipboard."""
from __future__ import annotations

import os
import platform
import shutil
import subprocess
import webbrowser

from linker.logging_conf import get_logger
from linker_shell.types import BrowserError, ClipboardError

logger = get_logger("shell.actions")

CLIPBOARD_TIMEOUT_S = 5.0


def open_in_browser(url: str) -> None:
    """Open `url` in the default browser."""
    if not webbrowser.open(url):
        raise BrowserError("no runnable browser found")
    logger.info("browser.open", extra={"event": "browser_open", "url": url})


def clipboard_command() -> list[str]:
    """Return the first available clipboard writer for this platform.

    macOS uses pbcopy, Windows uses clip, and other systems try wl-copy
    (Wayland sessions only), then xclip, then xsel.
    """
    system = platform.system()
    if system == "Darwin":
        candidates = [["pbcopy"]]
    elif system == "Windows":
        candidates = [["clip"]]
    else:
        candidates = [["xclip", "-selection", "clipboard"], ["xsel", "--clipboard", "--input"]]
        if os.getenv("WAYLAND_DISPLAY"):
            candidates.insert(0, ["wl-copy"])

    for cmd in candidates:
        if shutil.which(cmd[0]):
            return cmd
    names = ", ".join(c[0] for c in candidates)
    raise ClipboardError(f"no clipboard command found (tried {names})")


def copy_to_clipboard(text: str) -> None:
    """Write `text` to the system clipboard through a platform command."""
    cmd = clipboard_command()
    try:
        subprocess.run(cmd, input=text, text=True, check=True, timeout=CLIPBOARD_TIMEOUT_S)
    except (OSError, subprocess.SubprocessError) as e:
        raise ClipboardError(f"{cmd[0]} failed: {e}") from e
    logger.info("clipboard.copy", extra={"event": "clipboard_copy", "chars": len(text)})
