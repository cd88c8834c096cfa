"""Synced lyrics lookup against LRCLIB.

This module only performs the HTTP request and picks the synced lyrics
field out of the JSON response. Parsing lives in ``lrc``.
"""

from typing import Optional

import requests  # type: ignore[import-untyped]

from ..config import HTTP_TIMEOUT, LRCLIB_URL, USER_AGENT
from ..utils.logging import get_logger

logger = get_logger(__name__)


class LyricsFetcher:
    """Fetch raw LRC text for a track."""

    def __init__(
        self,
        base_url: str = LRCLIB_URL,
        timeout: int = HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_lyrics(self, artist: str, title: str) -> Optional[str]:
        """
        Fetch synced lyrics for ``artist`` / ``title``.

        Returns:
            Raw LRC text, or None if no synced lyrics are available
        """
        params = {"artist_name": artist, "track_name": title}
        logger.info(f"Fetching lyrics for '{title}' by '{artist}'")

        try:
            resp = self.session.get(
                self.base_url,
                params=params,
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Lyrics request failed: {e}")
            return None

        if resp.status_code == 404:
            logger.warning(f"No lyrics found for '{title}' by '{artist}'")
            return None

        try:
            resp.raise_for_status()
            data = resp.json()
        except requests.HTTPError as e:
            logger.error(f"Lyrics request failed: {e}")
            return None
        except ValueError as e:
            logger.error(f"Invalid JSON in lyrics response: {e}")
            logger.debug(f"Raw response: {resp.text[:500]}")
            return None

        if not isinstance(data, dict):
            logger.error("Unexpected lyrics response format")
            return None

        synced = data.get("syncedLyrics")
        if synced:
            return synced

        if data.get("plainLyrics"):
            logger.warning("Only plain lyrics found (no timestamps)")

        return None
