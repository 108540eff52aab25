"""Tests for selection parsing"""

import pytest

from linker.domain.links import InvalidRequestError, LineRange
from linker.domain.selection import Selection, line_range_from_bounds, parse_line_spec


class TestSelection:
    def test_caret_below_anchor(self):
        assert Selection(top_line=3, current_line=8).to_line_range() == LineRange(
            start_line=3, end_line=8
        )

    def test_caret_above_anchor(self):
        assert Selection(top_line=8, current_line=3).to_line_range() == LineRange(
            start_line=3, end_line=8
        )


class TestParseLineSpec:
    @pytest.mark.parametrize(
        "spec, expected",
        [
            ("12", (12, 12)),
            ("3-5", (3, 5)),
            ("3:5", (3, 5)),
            (" 3 - 5 ", (3, 5)),
            ("9-4", (4, 9)),
        ],
    )
    def test_valid(self, spec, expected):
        rng = parse_line_spec(spec)

        assert (rng.start_line, rng.end_line) == expected

    @pytest.mark.parametrize("spec", [None, "", "   "])
    def test_empty_means_no_selection(self, spec):
        assert parse_line_spec(spec) is None

    @pytest.mark.parametrize("spec", ["abc", "3-", "-3", "1.5", "0", "0-4"])
    def test_invalid(self, spec):
        with pytest.raises(InvalidRequestError):
            parse_line_spec(spec)


class TestLineRangeFromBounds:
    def test_no_bounds(self):
        assert line_range_from_bounds(None, None) is None

    def test_end_defaults_to_start(self):
        assert line_range_from_bounds(4, None) == LineRange(start_line=4, end_line=4)

    def test_both_bounds(self):
        assert line_range_from_bounds(4, 6) == LineRange(start_line=4, end_line=6)

    def test_end_without_start(self):
        with pytest.raises(InvalidRequestError, match="start_line"):
            line_range_from_bounds(None, 6)

    @pytest.mark.parametrize("start, end", [(0, 2), (5, 2), (-1, None)])
    def test_out_of_range(self, start, end):
        with pytest.raises(InvalidRequestError):
            line_range_from_bounds(start, end)
