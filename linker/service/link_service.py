from __future__ import annotations

import os

from ..domain.links import (
    InvalidRequestError,
    LineRange,
    build_link,
    effective_line_range,
    make_link_request,
)
from ..domain.workspace import Workspace, WorkspaceMapping, parse_mappings
from ..logging_conf import get_logger

logger = get_logger("service.links")

SERVER_URL_ENV = "LINKER_SERVER_URL"
MAPPINGS_ENV = "LINKER_MAPPINGS"


def get_server_url_from_env() -> str | None:
    """Return LINKER_SERVER_URL, or None when unset or blank."""
    raw = os.getenv(SERVER_URL_ENV, "").strip()
    return raw or None


def get_mappings_from_env() -> list[WorkspaceMapping]:
    """Return the workspace mappings listed in LINKER_MAPPINGS.

    Entries are ``SERVER=LOCAL`` pairs separated by ``;``.
    """
    return parse_mappings(os.getenv(MAPPINGS_ENV))


def resolve_server_url(server_url: str | None) -> str:
    """Pick the explicit server URL, falling back to the environment."""
    url = server_url or get_server_url_from_env()
    if not url:
        raise InvalidRequestError(f"server_url is required (or set {SERVER_URL_ENV})")
    return url


def _result(url: str, project_name: str, server_path: str, line_range: LineRange | None) -> dict:
    return {
        "url": url,
        "project_name": project_name,
        "server_path": server_path,
        "line_range": line_range,
    }


# ------------------------
# Use-cases
# ------------------------

def generate_link(
    *,
    server_url: str | None,
    project_name: str,
    server_path: str,
    line_range: LineRange | None = None,
) -> dict:
    """Build a link from already-resolved server coordinates."""
    request = make_link_request(
        server_url=resolve_server_url(server_url),
        project_name=project_name,
        server_path=server_path,
        line_range=line_range,
    )
    url = build_link(request)
    pinned = effective_line_range(request.line_range)
    logger.info(
        "link.build",
        extra={
            "event": "link_build",
            "project_name": request.project_name,
            "server_path": request.server_path,
            "has_lines": pinned is not None,
        },
    )
    return _result(url, request.project_name, request.server_path, pinned)


def generate_link_for_local_item(
    *,
    workspace: Workspace,
    local_path: str,
    line_range: LineRange | None = None,
) -> dict:
    """Resolve a local file through the workspace mappings, then build its link."""
    item = workspace.resolve(local_path)
    logger.info(
        "link.resolve",
        extra={
            "event": "link_resolve",
            "local_path": local_path,
            "server_path": item.server_path,
        },
    )
    return generate_link(
        server_url=workspace.server_url,
        project_name=item.project_name,
        server_path=item.server_path,
        line_range=line_range,
    )


def make_workspace(
    *, server_url: str | None, mappings: list[WorkspaceMapping] | None = None
) -> Workspace:
    """Build a workspace, filling the URL and mappings from the environment when omitted."""
    return Workspace(
        server_url=resolve_server_url(server_url),
        mappings=mappings if mappings else get_mappings_from_env(),
    )
