"""Configuration settings for LRC Karaoke."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .exceptions import ConfigError

# Directories (can be overridden via environment variables)
DEFAULT_WORK_DIR = Path(os.getenv("LRCKARAOKE_WORK_DIR", "temp"))
DEFAULT_OUTPUT_DIR = Path(os.getenv("LRCKARAOKE_OUTPUT_DIR", "output"))
DEFAULT_SEPARATOR = os.getenv("LRCKARAOKE_SEPARATOR") or None

# Video settings
VIDEO_WIDTH = int(os.getenv("LRCKARAOKE_VIDEO_WIDTH", "1920"))
VIDEO_HEIGHT = int(os.getenv("LRCKARAOKE_VIDEO_HEIGHT", "1080"))
FPS = 30
AUDIO_BITRATE = "192k"

# Resolution presets
RESOLUTION_PRESETS = {
    "720p": (1280, 720),
    "1080p": (1920, 1080),
    "1440p": (2560, 1440),
    "4k": (3840, 2160),
}

# Subtitle style
FONT_NAME = os.getenv("LRCKARAOKE_FONT_NAME", "Montserrat")
FONT_SIZE_CURRENT = 60
FONT_SIZE_NEXT = 45
FONT_SIZE_NEXT2 = 36
TRANSITION_DURATION = float(os.getenv("LRCKARAOKE_TRANSITION", "0.3"))

# Lyric timing
LAST_LINE_PADDING = 5.0  # Seconds appended after the final lyric line
WORD_STUB_DURATION = 0.5  # Provisional length of a line's last word
MIN_LINE_DURATION = 0.1

# Lyrics provider
LRCLIB_URL = "https://lrclib.net/api/get"
HTTP_TIMEOUT = 10
USER_AGENT = "lrckaraoke"


@dataclass
class AssConfig:
    """Style settings used when generating the subtitle document."""

    resolution_x: int = VIDEO_WIDTH
    resolution_y: int = VIDEO_HEIGHT
    font_name: str = FONT_NAME
    font_size_current: int = FONT_SIZE_CURRENT
    font_size_next: int = FONT_SIZE_NEXT
    font_size_next2: int = FONT_SIZE_NEXT2
    transition_duration: float = TRANSITION_DURATION

    def validate(self) -> None:
        if self.resolution_x <= 0 or self.resolution_y <= 0:
            raise ConfigError("Invalid video dimensions")
        if min(self.font_size_current, self.font_size_next, self.font_size_next2) <= 0:
            raise ConfigError("Font sizes must be positive")
        if self.transition_duration < 0:
            raise ConfigError("Transition duration must be non-negative")
        if not self.font_name.strip():
            raise ConfigError("Font name cannot be empty")


@dataclass
class Paths:
    """Locations of external tools and intermediate artifacts."""

    separator_binary: Optional[Path] = None
    temp_dir: Path = DEFAULT_WORK_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR

    def __post_init__(self):
        if self.separator_binary is None and DEFAULT_SEPARATOR:
            self.separator_binary = Path(DEFAULT_SEPARATOR)
        self.temp_dir = Path(self.temp_dir)
        self.output_dir = Path(self.output_dir)

    def ensure(self) -> None:
        """Create the work and output directories."""
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)


def validate_config() -> None:
    """Validate module-level configuration values."""
    if VIDEO_WIDTH <= 0 or VIDEO_HEIGHT <= 0:
        raise ConfigError("Invalid video dimensions")

    if FPS <= 0:
        raise ConfigError("Invalid FPS value")

    if TRANSITION_DURATION < 0:
        raise ConfigError("Invalid transition duration")


# Validate config on import
validate_config()


def parse_resolution(resolution_str: str) -> Tuple[int, int]:
    """
    Parse resolution string into (width, height) tuple.

    Args:
        resolution_str: Resolution as "WIDTHxHEIGHT" (e.g., "1920x1080")
                       or preset name (e.g., "720p", "1080p", "4k")

    Returns:
        Tuple of (width, height)

    Raises:
        ValueError: If resolution string is invalid
    """
    resolution_str = resolution_str.lower().strip()

    if resolution_str in RESOLUTION_PRESETS:
        return RESOLUTION_PRESETS[resolution_str]

    if "x" in resolution_str:
        try:
            parts = resolution_str.split("x")
            width = int(parts[0])
            height = int(parts[1])
            if width > 0 and height > 0:
                return (width, height)
        except (ValueError, IndexError):
            pass

    raise ValueError(
        f"Invalid resolution: {resolution_str}. "
        f"Use format 'WIDTHxHEIGHT' (e.g., '1920x1080') or "
        f"preset name: {', '.join(RESOLUTION_PRESETS.keys())}"
    )
