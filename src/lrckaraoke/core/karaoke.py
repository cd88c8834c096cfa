"""Main karaoke pipeline orchestrating all components."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from ..config import AssConfig, Paths
from ..exceptions import LyricsError, SeparationError
from ..utils.logging import get_logger
from ..utils.performance import PerformanceMonitor, format_timings
from ..utils.validation import VIDEO_EXTENSIONS, sanitize_filename, validate_output_path
from .ass import AssConverter
from .downloader import YouTubeDownloader
from .lrc import parse_lrc_with_stats
from .lyrics_fetch import LyricsFetcher
from .models import LrcParseResult
from .renderer import VideoRenderer
from .separator import AudioSeparator

logger = get_logger(__name__)

ASS_FILENAME = "lyrics.ass"


@dataclass
class PipelineResult:
    """Artifacts produced by a pipeline run."""

    output_path: Path
    ass_path: Path
    audio_path: Path
    artist: str
    title: str
    line_count: int
    separated: bool = False
    timings: Dict[str, float] = field(default_factory=dict)


def parse_lyrics(lrc_text: str) -> LrcParseResult:
    """Parse LRC text, logging what had to be skipped."""
    result = parse_lrc_with_stats(lrc_text)
    if logger.isEnabledFor(logging.DEBUG):
        for i, line in enumerate(result.lines):
            try:
                line.validate()
            except ValueError as e:
                logger.debug(f"Line {i} at {line.start_time:.2f}s: {e}")
    if result.dropped_lines:
        logger.info(f"Skipped {result.dropped_lines} non-lyric lines")
    return result


def convert_lrc_file(
    lrc_path: Path, ass_path: Path, config: Optional[AssConfig] = None
) -> LrcParseResult:
    """Convert an LRC file on disk into an ASS file."""
    lrc_path = Path(lrc_path)
    try:
        lrc_text = lrc_path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise LyricsError(f"Cannot read lyrics file {lrc_path}: {e}")

    result = parse_lyrics(lrc_text)
    converter = AssConverter(config)
    converter.save_to_file(converter.generate_ass(result.lines), ass_path)
    return result


class KaraokePipeline:
    """Turn a song URL into a karaoke video."""

    def __init__(
        self,
        config: Optional[AssConfig] = None,
        paths: Optional[Paths] = None,
        downloader: Optional[YouTubeDownloader] = None,
        separator: Optional[AudioSeparator] = None,
        fetcher: Optional[LyricsFetcher] = None,
        renderer: Optional[VideoRenderer] = None,
    ):
        self.config = config or AssConfig()
        self.paths = paths or Paths()
        self.converter = AssConverter(self.config)
        self.downloader = downloader or YouTubeDownloader(self.paths.temp_dir)
        self.separator = separator or AudioSeparator(self.paths.separator_binary)
        self.fetcher = fetcher or LyricsFetcher()
        self.renderer = renderer or VideoRenderer(
            width=self.config.resolution_x, height=self.config.resolution_y
        )

    def run(
        self,
        url: str,
        artist: Optional[str] = None,
        title: Optional[str] = None,
        separate: bool = False,
        output_name: Optional[str] = None,
    ) -> PipelineResult:
        self.paths.ensure()
        timings: Dict[str, float] = {}

        if not (artist and title):
            with PerformanceMonitor("metadata lookup", timings):
                metadata = self.downloader.extract_metadata(url)
            artist = artist or metadata["artist"]
            title = title or metadata["title"]

        with PerformanceMonitor("audio download", timings):
            audio_path = self.downloader.download_audio(url, self.paths.temp_dir)

        separated = False
        if separate:
            try:
                with PerformanceMonitor("vocal separation", timings):
                    audio_path = self.separator.separate(audio_path, self.paths.temp_dir)
                separated = True
            except SeparationError as e:
                logger.warning(f"{e}; using original mix")

        with PerformanceMonitor("lyrics fetch", timings):
            lrc_text = self.fetcher.fetch_lyrics(artist, title)
        if not lrc_text:
            raise LyricsError(f"No synced lyrics found for '{title}' by '{artist}'")

        parsed = parse_lyrics(lrc_text)
        if not parsed.lines:
            raise LyricsError("Synced lyrics contained no timed lines")
        logger.info(
            f"Parsed {len(parsed.lines)} lines ({parsed.word_level_lines} word-level)"
        )

        ass_path = self.converter.save_to_file(
            self.converter.generate_ass(parsed.lines),
            self.paths.temp_dir / ASS_FILENAME,
        )

        filename = sanitize_filename(output_name or f"{artist} - {title}")
        if Path(filename).suffix.lower() not in VIDEO_EXTENSIONS:
            filename += ".mp4"
        output_path = validate_output_path(str(self.paths.output_dir / filename))

        with PerformanceMonitor("video render", timings):
            self.renderer.render(audio_path, ass_path, output_path)
        logger.info(f"Stage timings: {format_timings(timings)}")

        return PipelineResult(
            output_path=output_path,
            ass_path=ass_path,
            audio_path=audio_path,
            artist=artist,
            title=title,
            line_count=len(parsed.lines),
            separated=separated,
            timings=timings,
        )
