"""Parse pasted Navitas flight text into structured flight options."""

from .models import NavitasOption, NavitasSegment, ParseResult
from .parser import LineKind, ParsedLine, classify_line, parse, parse_navitas_text, split_blocks

__all__ = [
    "LineKind",
    "NavitasOption",
    "NavitasSegment",
    "ParseResult",
    "ParsedLine",
    "classify_line",
    "parse",
    "parse_navitas_text",
    "split_blocks",
]
