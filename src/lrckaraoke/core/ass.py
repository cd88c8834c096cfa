"""ASS subtitle generation with a three-tier scrolling karaoke display.

Each lyric line produces up to three dialogue events spanning that line's
time window:

- ``Current``: the active line, highlighted word by word with ``\\k`` tags,
  fading in and sliding up from the "next" row.
- ``Next``: the following line, sliding up from the "next2" row.
- ``Next2``: the line after that, rising from below the screen and fading
  out as it is about to be promoted.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..config import AssConfig, MIN_LINE_DURATION
from ..exceptions import RenderError
from ..utils.logging import get_logger
from .models import LyricLine

logger = get_logger(__name__)

STYLE_CURRENT = "Current"
STYLE_NEXT = "Next"
STYLE_NEXT2 = "Next2"

# Gap between tier rows as a fraction of canvas height
TIER_GAP_RATIO = 0.12

_STYLE_FORMAT = (
    "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, "
    "OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, "
    "ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, "
    "MarginL, MarginR, MarginV, Encoding"
)

_EVENT_FORMAT = (
    "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, "
    "Effect, Text"
)


def format_ass_time(seconds: float) -> str:
    """Format seconds as an ASS timestamp (H:MM:SS.CC)."""
    if seconds < 0:
        seconds = 0.0
    total_cs = int(round(seconds * 100))
    hours, rem = divmod(total_cs, 360000)
    minutes, rem = divmod(rem, 6000)
    secs, cs = divmod(rem, 100)
    return f"{hours}:{minutes:02d}:{secs:02d}.{cs:02d}"


# Word joiner: invisible, but stops libass reading \N, \n or \h
_BACKSLASH_BREAK = "\u2060"


def escape_ass_text(text: str) -> str:
    """Keep lyric text from opening override blocks or breaking the row."""
    text = text.replace("\\", "\\" + _BACKSLASH_BREAK)
    return text.replace("{", "(").replace("}", ")")


def _ms(seconds: float) -> int:
    return int(round(seconds * 1000))


@dataclass(frozen=True)
class TierLayout:
    """Screen anchors (centre points) for the scrolling rows."""

    x: int
    current_y: int
    next_y: int
    next2_y: int
    offscreen_y: int

    @classmethod
    def from_config(cls, config: AssConfig) -> "TierLayout":
        gap = int(round(config.resolution_y * TIER_GAP_RATIO))
        current_y = config.resolution_y // 2
        return cls(
            x=config.resolution_x // 2,
            current_y=current_y,
            next_y=current_y + gap,
            next2_y=current_y + 2 * gap,
            offscreen_y=current_y + 3 * gap,
        )


@dataclass(frozen=True)
class LineTiming:
    """Animation timing for one line, relative to the line's start."""

    duration: float
    transition: float
    move_start: float

    @classmethod
    def for_line(cls, line: LyricLine, transition_duration: float) -> "LineTiming":
        duration = max(MIN_LINE_DURATION, line.end_time - line.start_time)
        transition = min(transition_duration, duration / 2)
        move_start = duration - transition if duration > transition else 0.0
        return cls(duration=duration, transition=transition, move_start=move_start)


class AssConverter:
    """Render parsed lyric lines into a complete ASS document."""

    def __init__(self, config: Optional[AssConfig] = None):
        self.config = config or AssConfig()
        self.config.validate()
        self.layout = TierLayout.from_config(self.config)

    def generate_header(self) -> str:
        cfg = self.config
        styles = [
            # Sung text turns gold; unsung text stays white until its \k sweep
            self._style_line(STYLE_CURRENT, cfg.font_size_current, "&H0000D7FF", "&H00FFFFFF", "00", bold=True),
            self._style_line(STYLE_NEXT, cfg.font_size_next, "&H78FFFFFF", "&H78FFFFFF", "78"),
            self._style_line(STYLE_NEXT2, cfg.font_size_next2, "&H99FFFFFF", "&H99FFFFFF", "99"),
        ]
        return "\n".join(
            [
                "[Script Info]",
                "; Generated by lrckaraoke",
                "Title: Karaoke",
                "ScriptType: v4.00+",
                "WrapStyle: 2",
                "ScaledBorderAndShadow: yes",
                f"PlayResX: {cfg.resolution_x}",
                f"PlayResY: {cfg.resolution_y}",
                "",
                "[V4+ Styles]",
                _STYLE_FORMAT,
                *styles,
                "",
                "[Events]",
                _EVENT_FORMAT,
            ]
        ) + "\n"

    def _style_line(
        self,
        name: str,
        size: int,
        primary: str,
        secondary: str,
        alpha: str,
        bold: bool = False,
    ) -> str:
        outline = f"&H{alpha}000000"
        return (
            f"Style: {name},{self.config.font_name},{size},{primary},{secondary},"
            f"{outline},&H80000000,{-1 if bold else 0},0,0,0,100,100,0,0,1,3,1,5,"
            f"10,10,10,1"
        )

    def generate_karaoke_text(self, line: LyricLine) -> str:
        """Build ``{\\kNN}word`` markup, one tag per word, no separators."""
        parts = []
        for word in line.words:
            cs = max(0, int(round((word.end_time - word.start_time) * 100)))
            parts.append(f"{{\\k{cs}}}{escape_ass_text(word.text)}")
        return "".join(parts)

    def _dialogue(self, layer: int, start: float, end: float, style: str, text: str) -> str:
        return (
            f"Dialogue: {layer},{format_ass_time(start)},{format_ass_time(end)},"
            f"{style},,0,0,0,,{text}"
        )

    def generate_events(self, index: int, lines: List[LyricLine]) -> List[str]:
        """Dialogue events shown while ``lines[index]`` is the active line."""
        line = lines[index]
        timing = LineTiming.for_line(line, self.config.transition_duration)
        layout = self.layout

        start = line.start_time
        end = line.start_time + timing.duration
        move_window = f"{_ms(timing.move_start)},{_ms(timing.duration)}"
        fade = _ms(timing.transition)

        if line.is_word_level:
            current_text = self.generate_karaoke_text(line)
        else:
            current_text = escape_ass_text(line.text)

        events = [
            self._dialogue(
                2,
                start,
                end,
                STYLE_CURRENT,
                f"{{\\move({layout.x},{layout.next_y},{layout.x},{layout.current_y},"
                f"{move_window})\\fad({fade},0)}}{current_text}",
            )
        ]

        if index + 1 < len(lines):
            events.append(
                self._dialogue(
                    1,
                    start,
                    end,
                    STYLE_NEXT,
                    f"{{\\move({layout.x},{layout.next2_y},{layout.x},{layout.next_y},"
                    f"{move_window})}}{escape_ass_text(lines[index + 1].display_text)}",
                )
            )

        if index + 2 < len(lines):
            events.append(
                self._dialogue(
                    0,
                    start,
                    end,
                    STYLE_NEXT2,
                    f"{{\\move({layout.x},{layout.offscreen_y},{layout.x},{layout.next2_y},"
                    f"{move_window})\\fad(0,{fade})}}"
                    f"{escape_ass_text(lines[index + 2].display_text)}",
                )
            )

        return events

    def generate_ass(self, lines: List[LyricLine]) -> str:
        """Generate the full .ass document for ``lines``."""
        events: List[str] = []
        for i in range(len(lines)):
            events.extend(self.generate_events(i, lines))

        logger.debug(f"Generated {len(events)} dialogue events for {len(lines)} lines")

        document = self.generate_header()
        if events:
            document += "\n".join(events) + "\n"
        return document

    def save_to_file(self, content: str, path: Union[str, Path]) -> Path:
        """Write ``content`` atomically: temp file in the same dir, then rename."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                    f.write(content)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise RenderError(f"Failed to write subtitles to {path}: {e}")

        logger.info(f"Saved subtitles to {path}")
        return path
