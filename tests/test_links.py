"""Tests for deep-link construction"""

from urllib.parse import parse_qsl, urlsplit

import pytest
from pydantic import ValidationError

from linker.domain.links import (
    InvalidRequestError,
    LineRange,
    LinkError,
    LinkRequest,
    build_link,
    effective_line_range,
    make_link_request,
)

FILE_URL = "https://dev.azure.com/org/Proj/_versionControl?path=%24%2FProj%2Fsrc%2FFile.cs"


def _request(**overrides):
    fields = {
        "server_url": "https://dev.azure.com/org",
        "project_name": "Proj",
        "server_path": "$/Proj/src/File.cs",
    }
    fields.update(overrides)
    return make_link_request(**fields)


class TestBuildLink:
    def test_multiline_selection(self):
        url = build_link(_request(line_range=LineRange(start_line=3, end_line=5)))

        assert url == (
            FILE_URL
            + "&lineStyle=plain&line=3&lineEnd=5&lineStartColumn=1&lineEndColumn=32767"
        )

    def test_without_selection(self):
        assert build_link(_request()) == FILE_URL

    def test_single_line_selection_ends_at_column_one(self):
        url = build_link(_request(line_range=LineRange(start_line=7, end_line=7)))

        assert url.endswith("&line=7&lineEnd=7&lineStartColumn=1&lineEndColumn=1")

    def test_selection_on_first_line_is_a_file_link(self):
        url = build_link(_request(line_range=LineRange(start_line=1, end_line=1)))

        assert url == FILE_URL

    def test_selection_from_first_line_keeps_lines(self):
        url = build_link(_request(line_range=LineRange(start_line=1, end_line=4)))

        params = dict(parse_qsl(urlsplit(url).query))
        assert params["line"] == "1"
        assert params["lineEnd"] == "4"
        assert params["lineEndColumn"] == "32767"

    def test_only_path_parameter_without_selection(self):
        url = build_link(_request(server_path="$/Proj/a b/c&d.cs"))

        assert parse_qsl(urlsplit(url).query) == [("path", "$/Proj/a b/c&d.cs")]

    def test_query_parameter_order(self):
        url = build_link(_request(line_range=LineRange(start_line=10, end_line=12)))

        keys = [k for k, _ in parse_qsl(urlsplit(url).query)]
        assert keys == ["path", "lineStyle", "line", "lineEnd", "lineStartColumn", "lineEndColumn"]

    def test_path_is_encoded_as_query_value(self):
        url = build_link(_request(server_path="$/Proj/my file.cs"))

        assert url.endswith("?path=%24%2FProj%2Fmy%20file.cs")

    def test_trailing_slash_on_server_url(self):
        assert build_link(_request(server_url="https://dev.azure.com/org/")) == FILE_URL

    def test_collection_url_with_path(self):
        url = build_link(_request(server_url="http://tfs:8080/tfs/DefaultCollection"))

        assert url.startswith("http://tfs:8080/tfs/DefaultCollection/Proj/_versionControl?")

    def test_project_name_is_a_single_segment(self):
        url = build_link(_request(project_name="My Proj"))

        assert "/My%20Proj/_versionControl?" in url

    def test_accepts_mapping(self):
        url = build_link(
            {
                "server_url": "https://dev.azure.com/org",
                "project_name": "Proj",
                "server_path": "$/Proj/src/File.cs",
                "line_range": {"start_line": 3, "end_line": 5},
            }
        )

        assert url.startswith(FILE_URL + "&lineStyle=plain&line=3")

    def test_idempotent(self):
        request = _request(line_range=LineRange(start_line=2, end_line=9))

        assert build_link(request) == build_link(request)


class TestInvalidRequests:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"project_name": ""},
            {"project_name": "   "},
            {"server_path": ""},
            {"server_url": "dev.azure.com/org"},
            {"server_url": "/org"},
            {"server_url": "https://dev.azure.com/org?x=1"},
            {"server_url": "https://dev.azure.com/org#top"},
            {"line_range": {"start_line": 5, "end_line": 3}},
            {"line_range": {"start_line": 0, "end_line": 3}},
        ],
    )
    def test_rejected(self, overrides):
        with pytest.raises(InvalidRequestError) as info:
            _request(**overrides)

        assert info.value.code == "invalid_request"
        assert isinstance(info.value.__cause__, ValidationError)

    def test_error_names_the_field(self):
        with pytest.raises(InvalidRequestError, match="project_name"):
            _request(project_name="")

    def test_mapping_with_empty_project(self):
        with pytest.raises(InvalidRequestError):
            build_link(
                {
                    "server_url": "https://dev.azure.com/org",
                    "project_name": "",
                    "server_path": "$/Proj/src/File.cs",
                }
            )

    def test_unsupported_request_type(self):
        with pytest.raises(InvalidRequestError):
            build_link(42)

    def test_errors_are_value_errors(self):
        assert issubclass(InvalidRequestError, LinkError)
        assert issubclass(LinkError, ValueError)


class TestEffectiveLineRange:
    def test_none(self):
        assert effective_line_range(None) is None

    def test_first_line_is_dropped(self):
        assert effective_line_range(LineRange(start_line=1, end_line=1)) is None

    def test_kept_past_first_line(self):
        rng = LineRange(start_line=1, end_line=2)

        assert effective_line_range(rng) is rng


def test_request_is_immutable():
    request = _request()

    with pytest.raises(ValidationError):
        request.project_name = "Other"


def test_request_model_direct():
    request = LinkRequest(
        server_url=" https://dev.azure.com/org ",
        project_name="Proj",
        server_path="$/Proj/src/File.cs",
    )

    assert request.server_url == "https://dev.azure.com/org"
    assert build_link(request) == FILE_URL
