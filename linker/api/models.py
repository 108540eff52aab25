from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..domain.links import LineRange


class MappingIn(BaseModel):
    """One server-folder to local-folder mapping."""
    server_item: str
    local_item: str


class ResolveLinkRequest(BaseModel):
    """Inputs for linking a local file through workspace mappings."""
    local_path: str
    server_url: Optional[str] = None
    mappings: list[MappingIn] = Field(default_factory=list)
    start_line: Optional[int] = None
    end_line: Optional[int] = None


class LinkResponse(BaseModel):
    """A generated deep link and the coordinates it was built from.

    `line_range` is the range pinned in the URL; it is null for file-level links.
    """
    url: str
    project_name: str
    server_path: str
    line_range: Optional[LineRange] = None


class ErrorDetail(BaseModel):
    """Body of the `detail` field on 4xx responses."""
    error_code: str
    error_message: str
