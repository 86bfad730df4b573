"""Offsets into script text and their line/column projection."""

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class TextSize:
    """A non-negative character offset or length."""

    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError(f"TextSize must be non-negative, got {self.value}")


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """Half-open span `[start, end)` of character offsets."""

    _start: int
    _end: int

    def __post_init__(self):
        if not 0 <= self._start <= self._end:
            raise ValueError(f"Invalid TextRange({self._start}, {self._end})")

    @staticmethod
    def new(start: TextSize, end: TextSize) -> "TextRange":
        return TextRange(start.value, end.value)

    @staticmethod
    def at(offset: TextSize, length: TextSize) -> "TextRange":
        return TextRange(offset.value, offset.value + length.value)

    @property
    def start(self) -> TextSize:
        return TextSize(self._start)

    @property
    def end(self) -> TextSize:
        return TextSize(self._end)

    def as_tuple(self) -> tuple[int, int]:
        return self._start, self._end

    def contains(self, offset: TextSize) -> bool:
        return self._start <= offset.value < self._end


def slice_text_range(source: str, range: TextRange) -> str:
    start, end = range.as_tuple()
    return source[start:end]


@dataclass(frozen=True, slots=True, order=True)
class SourceRange:
    """
    Editor-facing line/column span.

    Lines and columns are 1-based; `end_column` is exclusive, so an empty
    range has `start_column == end_column` on the same line.
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def __post_init__(self):
        if self.start_line < 1 or self.end_line < 1:
            raise ValueError("SourceRange lines are 1-based")
        if self.start_column < 1 or self.end_column < 1:
            raise ValueError("SourceRange columns are 1-based")
        if (self.start_line, self.start_column) > (self.end_line, self.end_column):
            raise ValueError("SourceRange invariant violated: start > end")

    @staticmethod
    def on_line(line: int, start_column: int, end_column: int) -> "SourceRange":
        return SourceRange(line, start_column, line, end_column)

    @staticmethod
    def whole_line(line: int, text: str) -> "SourceRange":
        """Range covering `text` placed at column 1 of `line`."""
        return SourceRange(line, 1, line, len(text) + 1)

    def move_to_line(self, line: int, column_delta: int = 0) -> "SourceRange":
        """Re-anchor a range computed for a single line onto `line` of a document.

        Ranges produced against an isolated line always start on line 1; the
        line delta is preserved and columns on the first line are shifted by
        `column_delta`.
        """
        line_delta = line - self.start_line
        end_delta = column_delta if self.end_line == self.start_line else 0
        return SourceRange(
            self.start_line + line_delta,
            self.start_column + column_delta,
            self.end_line + line_delta,
            self.end_column + end_delta,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "startLine": self.start_line,
            "startColumn": self.start_column,
            "endLine": self.end_line,
            "endColumn": self.end_column,
        }

    def __repr__(self) -> str:
        return f"SourceRange({self.start_line}:{self.start_column}-{self.end_line}:{self.end_column})"


class LineIndex:
    """Maps offsets into `source` to 1-based line/column positions.

    `\r\n`, `\r` and `\n` each end a line.
    """

    def __init__(self, source: str) -> None:
        self._length = len(source)
        starts = [0]
        for offset, ch in enumerate(source):
            if ch == "\n" or (ch == "\r" and source[offset + 1 : offset + 2] != "\n"):
                starts.append(offset + 1)
        self._line_starts = starts

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_col(self, offset: TextSize) -> tuple[int, int]:
        value = min(offset.value, self._length)
        line = bisect_right(self._line_starts, value) - 1
        return line + 1, value - self._line_starts[line] + 1

    def source_range(self, range: TextRange) -> SourceRange:
        start_line, start_column = self.line_col(range.start)
        end_line, end_column = self.line_col(range.end)
        return SourceRange(start_line, start_column, end_line, end_column)
