"""Text offsets, ranges and line/column mapping."""

from trigscript.text.text import (
    LineIndex,
    SourceRange,
    TextRange,
    TextSize,
    slice_text_range,
)

__all__ = [
    "LineIndex",
    "SourceRange",
    "TextRange",
    "TextSize",
    "slice_text_range",
]
