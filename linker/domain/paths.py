from __future__ import annotations

import posixpath
import re

__all__ = [
    "SERVER_ROOT",
    "normalize_local_path",
    "normalize_server_path",
    "relative_segments",
    "is_under",
]

# Root of every version-control server path.
SERVER_ROOT = "$/"

_SLASHES_RE = re.compile(r"/+")


def _to_posix(path: str) -> str:
    return _SLASHES_RE.sub("/", path.strip().replace("\\", "/"))


def normalize_local_path(path: str) -> str:
    """Deterministically normalize a local file or folder path.

    Rules:
    - Strip leading/trailing whitespace.
    - Convert backslashes to forward slashes (Windows→POSIX style).
    - Collapse repeated slashes, keeping a leading "//" for UNC shares.
    - Drop "." segments and fold ".." into its parent.
    - Remove trailing "/" (a bare root stays "/").

    Case is preserved; comparisons decide on case sensitivity.

    Raises:
        ValueError: if the path is empty.
    """
    if not isinstance(path, str) or not path.strip():
        raise ValueError("local path must be a non-empty string")

    raw = path.strip().replace("\\", "/")
    p = posixpath.normpath(_to_posix(raw))
    if raw.startswith("//"):
        p = "/" + p
    return p


def normalize_server_path(path: str) -> str:
    """Normalize a server path of the form ``$/Project/folder/file``.

    Raises:
        ValueError: if the path is empty or not rooted at ``$/``.
    """
    if not isinstance(path, str) or not path.strip():
        raise ValueError("server path must be a non-empty string")

    p = _to_posix(path)
    if p == "$":
        p = SERVER_ROOT
    if not p.startswith(SERVER_ROOT):
        raise ValueError(f"server path must start with {SERVER_ROOT!r}: {path!r}")
    if p != SERVER_ROOT:
        p = p.rstrip("/")
    return p


def _segments(path: str) -> list[str]:
    return path.rstrip("/").split("/")


def relative_segments(path: str, folder: str) -> list[str] | None:
    """Return the segments of `path` below `folder`, or None if it is outside.

    Both arguments must already be normalized. Segments are compared
    case-insensitively; the returned ones keep the case of `path`.
    """
    head = _segments(folder)
    parts = _segments(path)
    if len(parts) < len(head):
        return None
    if any(a.casefold() != b.casefold() for a, b in zip(parts, head)):
        return None
    rest = parts[len(head):]
    if ".." in rest:
        return None
    return rest


def is_under(path: str, folder: str) -> bool:
    """Return True if `path` equals `folder` or lives below it."""
    return relative_segments(path, folder) is not None
