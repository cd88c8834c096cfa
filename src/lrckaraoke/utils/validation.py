"""Validation utilities."""

import re
from pathlib import Path
from urllib.parse import urlparse

from ..exceptions import ValidationError

MAX_TRANSITION = 5.0
VIDEO_EXTENSIONS = (".mp4", ".mkv", ".mov")


def validate_url(url: str) -> str:
    """Validate a media URL handed to the audio downloader."""
    if not url or not url.strip():
        raise ValidationError("URL cannot be empty")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"Invalid URL: {url}")
    return url


def validate_transition(transition: float) -> float:
    """Validate transition duration in seconds."""
    if not 0.0 <= transition <= MAX_TRANSITION:
        raise ValidationError(
            f"Transition must be between 0 and {MAX_TRANSITION} seconds"
        )
    return transition


def validate_output_path(path: str) -> Path:
    """Validate and normalize output video path."""
    output_path = Path(path)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ValidationError(f"Cannot create output directory: {e}")

    if output_path.suffix.lower() not in VIDEO_EXTENSIONS:
        raise ValidationError(
            f"Output file must have one of these extensions: {', '.join(VIDEO_EXTENSIONS)}"
        )

    return output_path


def sanitize_filename(name: str) -> str:
    """Remove invalid characters from filename."""
    sanitized = re.sub(r'[<>:"/\\|?*\x00-\x1f]', "", name)
    sanitized = re.sub(r"\s+", " ", sanitized)
    return sanitized[:100].strip() or "karaoke"
