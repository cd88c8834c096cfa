"""Core functionality modules."""

from .models import LrcParseResult, LyricLine, WordSegment
from .lrc import LrcParser, parse_lrc, parse_lrc_time, parse_lrc_with_stats
from .ass import AssConverter, format_ass_time

__all__ = [
    "WordSegment",
    "LyricLine",
    "LrcParseResult",
    "LrcParser",
    "parse_lrc",
    "parse_lrc_time",
    "parse_lrc_with_stats",
    "AssConverter",
    "format_ass_time",
]
