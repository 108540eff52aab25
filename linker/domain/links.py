from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlencode, urlsplit

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

__all__ = [
    "VERSION_CONTROL_SEGMENT",
    "LINE_STYLE",
    "LINE_START_COLUMN",
    "MAX_LINE_COLUMN",
    "LinkError",
    "InvalidRequestError",
    "LineRange",
    "LinkRequest",
    "effective_line_range",
    "make_link_request",
    "build_link",
]

VERSION_CONTROL_SEGMENT = "_versionControl"
LINE_STYLE = "plain"
LINE_START_COLUMN = 1
# Largest signed 16-bit value; the web view clamps it to the end of the line.
MAX_LINE_COLUMN = 32767


# ------------------------
# Errors
# ------------------------
class LinkError(ValueError):
    """Base class for link-generation errors.

    The `code` attribute lets the API and the CLI map errors to stable
    machine codes.
    """

    code: str = "link_error"


class InvalidRequestError(LinkError):
    """Raised when a link request is malformed or missing required fields."""

    code = "invalid_request"


# ------------------------
# Schema
# ------------------------
class LineRange(BaseModel):
    """A 1-based, inclusive range of selected lines."""

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(..., ge=1)
    end_line: int = Field(..., ge=1)

    @model_validator(mode="after")
    def _ordered(self) -> LineRange:
        if self.end_line < self.start_line:
            raise ValueError("end_line must be greater than or equal to start_line")
        return self

    @property
    def is_multiline(self) -> bool:
        return self.end_line > self.start_line


class LinkRequest(BaseModel):
    """Already-resolved inputs for a single version-control deep link."""

    model_config = ConfigDict(frozen=True)

    server_url: str  # project collection URI, e.g. https://dev.azure.com/org
    project_name: str = Field(..., min_length=1)
    server_path: str = Field(..., min_length=1)  # e.g. $/Proj/src/File.cs
    line_range: LineRange | None = None

    @field_validator("server_url")
    @classmethod
    def _absolute(cls, value: str) -> str:
        value = value.strip()
        parts = urlsplit(value)
        if not parts.scheme or not parts.netloc:
            raise ValueError("server_url must be an absolute URI")
        if "?" in value or "#" in value:
            raise ValueError("server_url must not carry a query or fragment")
        return value

    @field_validator("project_name", "server_path")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


# ------------------------
# Internals
# ------------------------

def _describe(error: ValidationError) -> str:
    """Flatten a pydantic error into one readable line."""
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "request"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)


def _query_params(request: LinkRequest) -> list[tuple[str, str | int]]:
    params: list[tuple[str, str | int]] = [("path", request.server_path)]

    rng = effective_line_range(request.line_range)
    if rng is None:
        return params

    params += [
        ("lineStyle", LINE_STYLE),
        ("line", rng.start_line),
        ("lineEnd", rng.end_line),
        ("lineStartColumn", LINE_START_COLUMN),
        ("lineEndColumn", MAX_LINE_COLUMN if rng.is_multiline else LINE_START_COLUMN),
    ]
    return params


# ------------------------
# Public API
# ------------------------

def effective_line_range(line_range: LineRange | None) -> LineRange | None:
    """Return the range a link pins, or None for a file-level link.

    A selection that ends on the first line produces a file-level link.
    """
    if line_range is None or line_range.end_line <= 1:
        return None
    return line_range


def make_link_request(**fields: Any) -> LinkRequest:
    """Validate raw fields into a `LinkRequest`.

    Raises `InvalidRequestError` carrying the validation failure as its cause.
    """
    try:
        return LinkRequest(**fields)
    except ValidationError as e:
        raise InvalidRequestError(_describe(e)) from e


def build_link(request: LinkRequest | Mapping[str, Any]) -> str:
    """Build the web URL for a server path, optionally pinned to a line range.

    Layout: ``<server_url>/<project>/_versionControl?path=<server_path>``
    followed, for selections ending past the first line, by
    ``lineStyle, line, lineEnd, lineStartColumn, lineEndColumn`` in that order.
    Query values are percent-encoded with no safe characters.
    """
    if isinstance(request, Mapping):
        request = make_link_request(**request)
    elif not isinstance(request, LinkRequest):
        raise InvalidRequestError(
            f"expected a LinkRequest or a mapping, got {type(request).__name__}"
        )

    base = request.server_url.rstrip("/")
    project = quote(request.project_name, safe="")
    query = urlencode(_query_params(request), quote_via=quote, safe="")
    return f"{base}/{project}/{VERSION_CONTROL_SEGMENT}?{query}"
