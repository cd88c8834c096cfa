"""Data models for timed lyrics."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class WordSegment:
    """A single lyric token with timing information."""

    text: str
    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def validate(self) -> None:
        if self.end_time < self.start_time:
            raise ValueError("Word end_time must be >= start_time")
        if not self.text:
            raise ValueError("Word text cannot be empty")


@dataclass
class LyricLine:
    """One displayed subtitle line, optionally carrying word timing."""

    start_time: float
    end_time: float
    text: str = ""
    words: List[WordSegment] = field(default_factory=list)
    is_word_level: bool = False

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    @property
    def display_text(self) -> str:
        """Text without timing markup, as shown in the preview tiers."""
        if self.is_word_level:
            return "".join(w.text for w in self.words)
        return self.text

    def validate(self) -> None:
        if self.end_time < self.start_time:
            raise ValueError("Line end_time must be >= start_time")
        if self.is_word_level and not self.words:
            raise ValueError("Word-level line must contain at least one word")
        if not self.is_word_level and self.words:
            raise ValueError("Plain line must not carry words")
        for w in self.words:
            w.validate()


@dataclass
class LrcParseResult:
    """Parsed lines plus counters for input the parser recovered from."""

    lines: List[LyricLine]
    dropped_lines: int = 0

    @property
    def word_level_lines(self) -> int:
        return sum(1 for line in self.lines if line.is_word_level)
