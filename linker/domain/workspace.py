from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .links import InvalidRequestError, LinkError
from .paths import SERVER_ROOT, normalize_local_path, normalize_server_path, relative_segments

__all__ = [
    "UpstreamResolutionError",
    "ServerItem",
    "WorkspaceMapping",
    "Workspace",
    "project_from_server_path",
    "make_mapping",
    "parse_mapping",
    "parse_mappings",
]


class UpstreamResolutionError(LinkError):
    """Raised when a local file cannot be resolved to a server item.

    This happens before any link is built: the file is outside every mapped
    folder, or it maps to the server root where no team project exists.
    """

    code = "upstream_resolution_failure"


class ServerItem(BaseModel):
    """A resolved server-side location."""

    project_name: str
    server_path: str


class WorkspaceMapping(BaseModel):
    """Pairs a server folder with the local folder it is checked out to."""

    model_config = ConfigDict(frozen=True)

    server_item: str
    local_item: str

    @field_validator("server_item")
    @classmethod
    def _server(cls, value: str) -> str:
        return normalize_server_path(value)

    @field_validator("local_item")
    @classmethod
    def _local(cls, value: str) -> str:
        return normalize_local_path(value)


class Workspace(BaseModel):
    """A set of folder mappings against one project collection."""

    server_url: str
    mappings: list[WorkspaceMapping] = Field(default_factory=list)

    def mapping_for_local_item(self, local_path: str) -> WorkspaceMapping:
        """Return the most specific mapping containing `local_path`."""
        return self._match(_normalize_local(local_path))[0]

    def _match(self, path: str) -> tuple[WorkspaceMapping, list[str]]:
        # Fewest leftover segments is the deepest mapped folder.
        matches = []
        for m in self.mappings:
            rest = relative_segments(path, m.local_item)
            if rest is not None:
                matches.append((m, rest))
        if not matches:
            raise UpstreamResolutionError(f"{path!r} is not in a mapped folder")
        return min(matches, key=lambda match: len(match[1]))

    def server_item_for_local_item(self, local_path: str) -> str:
        mapping, rest = self._match(_normalize_local(local_path))
        if not rest:
            return mapping.server_item
        base = mapping.server_item.rstrip("/")
        return "/".join([base, *rest])

    def resolve(self, local_path: str) -> ServerItem:
        """Resolve a local file to its team project and server path."""
        server_path = self.server_item_for_local_item(local_path)
        return ServerItem(
            project_name=project_from_server_path(server_path),
            server_path=server_path,
        )


def _normalize_local(local_path: str) -> str:
    try:
        return normalize_local_path(local_path)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e


def project_from_server_path(server_path: str) -> str:
    """Return the team project: the first segment below ``$/``."""
    try:
        path = normalize_server_path(server_path)
    except ValueError as e:
        raise UpstreamResolutionError(str(e)) from e
    project = path[len(SERVER_ROOT):].split("/", 1)[0]
    if not project:
        raise UpstreamResolutionError(f"{server_path!r} does not belong to a team project")
    return project


def make_mapping(server_item: str, local_item: str) -> WorkspaceMapping:
    """Validate one mapping, reporting failures as `InvalidRequestError`."""
    try:
        return WorkspaceMapping(server_item=server_item, local_item=local_item)
    except ValidationError as e:
        raise InvalidRequestError(
            f"invalid mapping {server_item!r} -> {local_item!r}: {e.errors()[0]['msg']}"
        ) from e


def parse_mapping(text: str) -> WorkspaceMapping:
    """Parse ``SERVER=LOCAL`` into a mapping.

    Splits on the first ``=`` so local paths may contain any other character.
    """
    server, sep, local = text.partition("=")
    if not sep:
        raise InvalidRequestError(f"mapping must look like SERVER=LOCAL: {text!r}")
    return make_mapping(server, local)


def parse_mappings(text: str | None) -> list[WorkspaceMapping]:
    """Parse a ``;``-separated list of ``SERVER=LOCAL`` entries."""
    if not text:
        return []
    return [parse_mapping(part) for part in text.split(";") if part.strip()]
