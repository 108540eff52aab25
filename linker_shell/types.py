from __future__ import annotations


class ShellError(RuntimeError):
    """Raised when a generated link cannot be handed to the desktop."""


class BrowserError(ShellError):
    """Raised when no browser could be launched for the link."""


class ClipboardError(ShellError):
    """Raised when no clipboard command is available or it fails."""
