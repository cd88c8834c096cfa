"""LRC parsing for karaoke lyrics.

Handles both plain line-synchronized LRC and the enhanced variant that
embeds per-word timestamps:

    [00:12.30]plain line
    [00:15.00]<00:15.00>word <00:15.40>level <00:16.10>line

Lines that do not start with a ``[mm:ss.xx]`` stamp (ID tags, comments,
garbage) are dropped. End times are not present in the format, so they
are inferred from the start of the following word or line.
"""

import re
from typing import List, Optional

from ..config import LAST_LINE_PADDING, WORD_STUB_DURATION
from ..utils.logging import get_logger
from .models import LrcParseResult, LyricLine, WordSegment

logger = get_logger(__name__)

# ----------------------
# Patterns
# ----------------------
_TIME_RE = re.compile(
    r"""
    (?P<min>\d{2})      # minutes
    :
    (?P<sec>\d{2})      # seconds
    \.
    (?P<cs>\d{2})       # centiseconds
    """,
    re.VERBOSE,
)

_LINE_RE = re.compile(r"^\[(?P<ts>\d{2}:\d{2}\.\d{2})\](?P<rest>.*)$")

_WORD_RE = re.compile(r"<(?P<ts>\d{2}:\d{2}\.\d{2})>(?P<text>[^<]*)")


# ----------------------
# Timestamp decoding
# ----------------------
def _decode_time(token: str) -> Optional[float]:
    """Decode ``MM:SS.CC`` to seconds, or None if the token is malformed."""
    if not token:
        return None
    match = _TIME_RE.fullmatch(token.strip())
    if not match:
        return None
    return (
        int(match.group("min")) * 60
        + int(match.group("sec"))
        + int(match.group("cs")) / 100
    )


def parse_lrc_time(token: str) -> float:
    """Parse a single LRC timestamp like ``01:23.45`` to seconds.

    Malformed input decodes to 0.0 instead of raising.
    """
    value = _decode_time(token)
    return 0.0 if value is None else value


# ----------------------
# Line parsing
# ----------------------
def _parse_words(rest: str) -> List[WordSegment]:
    """Extract word segments with provisional end times."""
    words: List[WordSegment] = []
    for match in _WORD_RE.finditer(rest):
        start = parse_lrc_time(match.group("ts"))
        words.append(
            WordSegment(
                text=match.group("text") or " ",
                start_time=start,
                end_time=start,
            )
        )

    for j, word in enumerate(words):
        if j + 1 < len(words):
            word.end_time = words[j + 1].start_time
        else:
            word.end_time = word.start_time + WORD_STUB_DURATION

    return words


def parse_lrc_with_stats(lrc_text: str) -> LrcParseResult:
    """Parse LRC text and report how much of it had to be skipped."""
    result = LrcParseResult(lines=[])
    if not lrc_text:
        return result

    for lineno, raw in enumerate(lrc_text.split("\n"), start=1):
        raw = raw.rstrip("\r")
        if not raw.strip():
            continue

        match = _LINE_RE.match(raw)
        if not match:
            result.dropped_lines += 1
            logger.debug(f"Skipping line {lineno}: no line timestamp")
            continue

        start = parse_lrc_time(match.group("ts"))
        rest = match.group("rest")
        words = _parse_words(rest)

        if words:
            line = LyricLine(
                start_time=start, end_time=start, words=words, is_word_level=True
            )
        else:
            line = LyricLine(start_time=start, end_time=start, text=rest)
        result.lines.append(line)

    _assign_line_end_times(result.lines)

    logger.debug(
        f"Parsed {len(result.lines)} lines ({result.word_level_lines} word-level), "
        f"dropped {result.dropped_lines}"
    )
    return result


def _assign_line_end_times(lines: List[LyricLine]) -> None:
    """Close each line at the next line's start, then stretch last words.

    Runs over the finalized sequence: every line's end must be known before
    the last word of that line can be extended to it.
    """
    for i, line in enumerate(lines):
        if i + 1 < len(lines):
            line.end_time = lines[i + 1].start_time
        else:
            line.end_time = line.start_time + LAST_LINE_PADDING

    for line in lines:
        if line.is_word_level:
            line.words[-1].end_time = line.end_time


def parse_lrc(lrc_text: str) -> List[LyricLine]:
    """Parse LRC text into timed lines."""
    return parse_lrc_with_stats(lrc_text).lines


class LrcParser:
    """Object wrapper around the LRC parsing functions."""

    def parse(self, lrc_text: str) -> List[LyricLine]:
        return parse_lrc(lrc_text)

    def parse_with_stats(self, lrc_text: str) -> LrcParseResult:
        return parse_lrc_with_stats(lrc_text)
