from __future__ import annotations

import argparse
import os

from linker.service.link_service import MAPPINGS_ENV, SERVER_URL_ENV


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the link command."""
    parser = argparse.ArgumentParser(
        prog="devops-link",
        description="Build a version-control deep link, open it and copy it to the clipboard.",
    )
    parser.add_argument(
        "local_path", nargs="?", help="Local file, resolved to a server path through --map"
    )
    parser.add_argument(
        "--server-url", help=f"Project collection URL (default: ${SERVER_URL_ENV})"
    )
    parser.add_argument(
        "--server-path", help="Server path such as $/Proj/src/File.cs; skips --map resolution"
    )
    parser.add_argument(
        "--project",
        dest="project_name",
        help="Team project (default: first segment of the server path)",
    )
    parser.add_argument(
        "--map",
        action="append",
        default=[],
        dest="mappings",
        metavar="SERVER=LOCAL",
        help=f"Workspace mapping; repeatable (default: ${MAPPINGS_ENV})",
    )
    parser.add_argument("--lines", metavar="N[-M]", help="Selected line or line range")
    parser.add_argument(
        "--no-open", action="store_false", dest="open_browser", help="Do not open a browser"
    )
    parser.add_argument(
        "--no-copy", action="store_false", dest="copy", help="Do not touch the clipboard"
    )
    parser.add_argument("--show", action="store_true", help="Print the link to stdout")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"))

    args = parser.parse_args(argv)
    if (args.local_path is None) == (args.server_path is None):
        parser.error("give either a local file or --server-path")
    return args
