#!/usr/bin/env python3
"""Command entry point: the shell-side counterpart of the link service.

Steps:
- resolve the server coordinates (explicit server path, or local file + mappings)
- build the link, pinned to the selected lines if any
- print it, open it in a browser and copy it to the clipboard
- on failure, report the error and copy the exception text instead
"""
from __future__ import annotations

import argparse
import os
import re
import sys
import traceback

from linker.domain.links import LinkError
from linker.domain.selection import parse_line_spec
from linker.domain.workspace import parse_mapping, project_from_server_path
from linker.logging_conf import get_logger, setup_logging
from linker.service import link_service
from linker_shell import actions
from linker_shell.cli import parse_args
from linker_shell.types import ClipboardError, ShellError

logger = get_logger("shell")

ERROR_MESSAGE = "There was an error generating the URL."

# C:\..., C:/... or \\server\share: already absolute even off Windows.
_WINDOWS_ABS_RE = re.compile(r"^(?:[A-Za-z]:[\\/]|\\\\)")


def _absolute_local_path(path: str) -> str:
    if os.path.isabs(path) or _WINDOWS_ABS_RE.match(path):
        return path
    return os.path.abspath(path)


def build_from_args(args: argparse.Namespace) -> dict:
    """Resolve the inputs named on the command line and build the link."""
    line_range = parse_line_spec(args.lines)

    if args.server_path is not None:
        project_name = args.project_name or project_from_server_path(args.server_path)
        return link_service.generate_link(
            server_url=args.server_url,
            project_name=project_name,
            server_path=args.server_path,
            line_range=line_range,
        )

    workspace = link_service.make_workspace(
        server_url=args.server_url,
        mappings=[parse_mapping(m) for m in args.mappings],
    )
    return link_service.generate_link_for_local_item(
        workspace=workspace,
        local_path=_absolute_local_path(args.local_path),
        line_range=line_range,
    )


def deliver(url: str, *, open_browser: bool, copy: bool, show: bool) -> None:
    """Hand the link to the desktop; raises `ShellError` on the first failure."""
    if show:
        print(url)
    if open_browser:
        actions.open_in_browser(url)
    if copy:
        actions.copy_to_clipboard(url)


def report_failure(error: LinkError, *, copy: bool) -> None:
    """Tell the user what went wrong and put the full exception on the clipboard."""
    logger.warning(
        "link.failed",
        extra={"event": "link_failed", "error_code": error.code, "error": str(error)},
    )
    print(f"{ERROR_MESSAGE}\n{error}", file=sys.stderr)
    if not copy:
        return
    try:
        actions.copy_to_clipboard("".join(traceback.format_exception(error)))
    except ClipboardError as e:
        logger.warning("clipboard.failed", extra={"event": "clipboard_failed", "error": str(e)})


def run_command(args: argparse.Namespace) -> int:
    """Run one link request; returns the process exit code.

    0: link delivered. 1: the link could not be built. 2: the link was built
    but could not be opened or copied (it is printed to stdout instead).
    """
    try:
        out = build_from_args(args)
    except LinkError as e:
        report_failure(e, copy=args.copy)
        return 1

    url = out["url"]
    try:
        deliver(url, open_browser=args.open_browser, copy=args.copy, show=args.show)
    except ShellError as e:
        logger.warning("link.deliver_failed", extra={"event": "deliver_failed", "error": str(e)})
        print(f"Could not hand off the link: {e}", file=sys.stderr)
        if not args.show:
            print(url)
        return 2
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.log_level, component="shell", stream=sys.stderr)
    raise SystemExit(run_command(args))


if __name__ == "__main__":
    main()
