from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .links import InvalidRequestError, LineRange

__all__ = [
    "Selection",
    "line_range_from_bounds",
    "parse_line_spec",
]

# "12", "3-5" or "3:5", optionally surrounded by whitespace.
_LINE_SPEC_RE = re.compile(r"^\s*(\d+)\s*(?:[-:]\s*(\d+)\s*)?$")


class Selection(BaseModel):
    """An editor selection: its top line and the line holding the caret.

    `top_line` is the first line of the selected text. `current_line` is
    where the caret sits, normally the last line; the two are still ordered
    with min/max when converted into a `LineRange`.
    """

    model_config = ConfigDict(frozen=True)

    top_line: int = Field(..., ge=1)
    current_line: int = Field(..., ge=1)

    def to_line_range(self) -> LineRange:
        return LineRange(
            start_line=min(self.top_line, self.current_line),
            end_line=max(self.top_line, self.current_line),
        )


def line_range_from_bounds(start_line: int | None, end_line: int | None) -> LineRange | None:
    """Build a range from optional bounds; `end_line` defaults to `start_line`.

    Raises:
        InvalidRequestError: if only `end_line` is given or a bound is out of range.
    """
    if start_line is None:
        if end_line is not None:
            raise InvalidRequestError("end_line requires start_line")
        return None
    try:
        return LineRange(
            start_line=start_line,
            end_line=start_line if end_line is None else end_line,
        )
    except ValidationError as e:
        raise InvalidRequestError(f"invalid line range: {e.errors()[0]['msg']}") from e


def parse_line_spec(spec: str | None) -> LineRange | None:
    """Parse a textual line selection such as ``"12"`` or ``"3-5"``.

    Empty input means no selection. Reversed bounds are ordered the same
    way an editor selection is.
    """
    if spec is None or not spec.strip():
        return None
    match = _LINE_SPEC_RE.match(spec)
    if match is None:
        raise InvalidRequestError(f"invalid line spec: {spec!r}")
    first = int(match.group(1))
    second = int(match.group(2)) if match.group(2) else first
    if first < 1 or second < 1:
        raise InvalidRequestError(f"line numbers are 1-based: {spec!r}")
    return Selection(top_line=first, current_line=second).to_line_range()
