"""Audio download and track metadata via yt-dlp."""

import re
from pathlib import Path
from typing import Dict, Optional, Tuple

import yt_dlp

from ..exceptions import DownloadError
from ..utils.logging import get_logger
from ..utils.validation import validate_url

logger = get_logger(__name__)

DOWNLOAD_STEM = "downloaded"

_TITLE_NOISE = [
    r'\s*\(Official\s*(Music\s*)?Video\)',
    r'\s*\(Official\s*Audio\)',
    r'\s*\(Official\s*Lyric\s*Video\)',
    r'\s*\(Lyric\s*Video\)',
    r'\s*\(Lyrics?\)',
    r'\s*\(Audio\)',
    r'\s*\(Visualizer\)',
    r'\s*\(Remaster(ed)?\s*\d*\)',
    r'\s*\[Official\s*(Music\s*)?Video\]',
    r'\s*\[Official\s*Audio\]',
    r'\s*[\[(](4K|HD|HQ|\d+K)[\])]',
    r'\s*\(M/?V\)',
    r'\s*M/?V\s*$',
]


def clean_video_title(video_title: str) -> str:
    """Strip common decorations like "(Official Video)" from a title."""
    cleaned = video_title or ""
    for pattern in _TITLE_NOISE:
        cleaned = re.sub(pattern, '', cleaned, flags=re.IGNORECASE)
    return cleaned.strip()


def split_artist_title(video_title: str) -> Tuple[str, str]:
    """
    Parse artist and song title from a video title.

    Handles formats like:
    - "Queen - Crazy Little Thing Called Love (Official Video)"
    - "Song Title by Artist Name"

    Returns:
        Tuple of (artist, title), or ("", "") if parsing fails
    """
    cleaned = clean_video_title(video_title)
    if not cleaned:
        return "", ""

    if ' - ' in cleaned:
        artist, title = (p.strip() for p in cleaned.split(' - ', 1))
        title = re.sub(r'\s*\(?\b(feat\.?|ft\.?)\s+.*$', '', title, flags=re.IGNORECASE).strip()
        if artist and title and len(artist) < 50:
            return artist, title

    by_match = re.search(r'^(.+?)\s+by\s+([^()\[\]]+)$', cleaned, re.IGNORECASE)
    if by_match:
        return by_match.group(2).strip(), by_match.group(1).strip()

    return "", ""


def _clean_uploader_name(uploader: str) -> str:
    """Trim channel suffixes like " - Topic" or "VEVO" from an uploader."""
    artist = uploader or ""
    for suffix in [' - Topic', 'VEVO', 'Official', 'Music', 'Channel']:
        if artist.endswith(suffix):
            artist = artist[:-len(suffix)].strip()
    return artist.strip()


def metadata_from_info(info: Dict) -> Dict[str, str]:
    """Pick artist/title out of a yt-dlp info dict."""
    video_title = info.get('title') or ''

    # Strategy 1: structured fields, populated for official music uploads
    yt_artist = info.get('artist') or info.get('creator') or ''
    yt_track = info.get('track') or ''
    if yt_artist and yt_track:
        return {'artist': yt_artist, 'title': yt_track}

    # Strategy 2: "Artist - Title" in the video title
    artist, title = split_artist_title(video_title)
    if artist and title:
        return {'artist': artist, 'title': title}

    # Strategy 3: uploader as artist
    return {
        'artist': _clean_uploader_name(info.get('uploader') or '') or 'Unknown',
        'title': clean_video_title(video_title) or 'Unknown',
    }


class YouTubeDownloader:
    """Download audio tracks into a work directory."""

    def __init__(self, work_dir: Path):
        self.work_dir = Path(work_dir)

    def extract_metadata(self, url: str) -> Dict[str, str]:
        """Look up artist and title for ``url`` without downloading."""
        url = validate_url(url)
        ydl_opts = {'quiet': True, 'no_warnings': True, 'skip_download': True}

        try:
            with yt_dlp.YoutubeDL(ydl_opts) as ydl:
                info = ydl.extract_info(url, download=False)
        except Exception as e:
            raise DownloadError(f"Failed to extract metadata: {e}")

        metadata = metadata_from_info(info or {})
        logger.info(f"Track: '{metadata['title']}' by '{metadata['artist']}'")
        return metadata

    def download_audio(self, url: str, output_dir: Optional[Path] = None) -> Path:
        """Download ``url`` as WAV and return the file path."""
        url = validate_url(url)
        output_dir = Path(output_dir) if output_dir else self.work_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        audio_path = output_dir / f"{DOWNLOAD_STEM}.wav"

        logger.info(f"Downloading audio from {url}")

        ydl_opts = {
            'format': 'bestaudio/best',
            'outtmpl': str(output_dir / f'{DOWNLOAD_STEM}.%(ext)s'),
            'postprocessors': [{
                'key': 'FFmpegExtractAudio',
                'preferredcodec': 'wav',
            }],
            'overwrites': True,
            'quiet': True,
            'no_warnings': True,
        }

        try:
            with yt_dlp.YoutubeDL(ydl_opts) as ydl:
                ydl.download([url])
        except Exception as e:
            raise DownloadError(f"Failed to download audio: {e}")

        if not audio_path.exists():
            raise DownloadError(f"Downloaded audio file not found: {audio_path}")

        logger.info(f"Downloaded audio to {audio_path}")
        return audio_path
