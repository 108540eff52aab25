from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from ..domain.links import InvalidRequestError, LinkError
from ..domain.selection import line_range_from_bounds
from ..domain.workspace import UpstreamResolutionError, make_mapping
from ..logging_conf import get_logger
from ..service import link_service
from .models import ErrorDetail, LinkResponse, ResolveLinkRequest

router = APIRouter()
logger = get_logger("api")

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorDetail},
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorDetail},
}


def _http_error(status_code: int, error: LinkError) -> HTTPException:
    logger.info(
        "link.rejected",
        extra={"event": "link_rejected", "error_code": error.code, "status_code": status_code},
    )
    return HTTPException(
        status_code=status_code,
        detail={"error_code": error.code, "error_message": str(error)},
    )


@router.get(
    "/links",
    response_model=LinkResponse,
    responses=_ERROR_RESPONSES,
    summary="Build a deep link from server coordinates",
)
async def get_link(
    project_name: str = Query(..., description="Team project name"),
    server_path: str = Query(..., description="Server path, e.g. $/Proj/src/File.cs"),
    server_url: Optional[str] = Query(None, description="Defaults to LINKER_SERVER_URL"),
    start_line: Optional[int] = Query(None, description="First selected line (1-based)"),
    end_line: Optional[int] = Query(None, description="Last selected line; defaults to start_line"),
) -> LinkResponse:
    """Return the version-control URL for a server path and optional line range."""
    try:
        out = link_service.generate_link(
            server_url=server_url,
            project_name=project_name,
            server_path=server_path,
            line_range=line_range_from_bounds(start_line, end_line),
        )
    except InvalidRequestError as e:
        raise _http_error(status.HTTP_400_BAD_REQUEST, e)
    return LinkResponse(**out)


@router.post(
    "/links/resolve",
    response_model=LinkResponse,
    responses=_ERROR_RESPONSES,
    summary="Build a deep link for a local file via workspace mappings",
)
async def resolve_link(req: ResolveLinkRequest) -> LinkResponse:
    """Map a local path to its server item, then build the link.

    When no mappings are sent, the ones in LINKER_MAPPINGS are used.
    """
    try:
        workspace = link_service.make_workspace(
            server_url=req.server_url,
            mappings=[make_mapping(m.server_item, m.local_item) for m in req.mappings],
        )
        out = link_service.generate_link_for_local_item(
            workspace=workspace,
            local_path=req.local_path,
            line_range=line_range_from_bounds(req.start_line, req.end_line),
        )
    except UpstreamResolutionError as e:
        raise _http_error(status.HTTP_422_UNPROCESSABLE_ENTITY, e)
    except InvalidRequestError as e:
        raise _http_error(status.HTTP_400_BAD_REQUEST, e)
    return LinkResponse(**out)
