"""Custom exceptions for LRC Karaoke."""

class LrcKaraokeError(Exception):
    """Base exception for LRC Karaoke."""
    pass

class ConfigError(LrcKaraokeError):
    """Invalid configuration values."""
    pass

class ValidationError(LrcKaraokeError):
    """Invalid input parameters."""
    pass

class DownloadError(LrcKaraokeError):
    """Error downloading audio or metadata."""
    pass

class SeparationError(LrcKaraokeError):
    """Error isolating the instrumental track."""
    pass

class LyricsError(LrcKaraokeError):
    """Error fetching or processing lyrics."""
    pass

class RenderError(LrcKaraokeError):
    """Error writing subtitles or rendering video."""
    pass
