"""Video rendering: audio + ASS subtitles over a solid background via ffmpeg."""

import shutil
import subprocess
from pathlib import Path
from typing import List

from ..config import AUDIO_BITRATE, FPS, VIDEO_HEIGHT, VIDEO_WIDTH
from ..exceptions import RenderError
from ..utils.logging import get_logger

logger = get_logger(__name__)


def escape_filter_path(path: Path) -> str:
    """Escape a path for use inside an ffmpeg filtergraph argument."""
    text = str(path).replace("\\", "/")
    for ch in (":", "'", ",", "[", "]", ";"):
        text = text.replace(ch, f"\\{ch}")
    return text


class VideoRenderer:
    """Render the final karaoke video with ffmpeg."""

    def __init__(
        self,
        width: int = VIDEO_WIDTH,
        height: int = VIDEO_HEIGHT,
        fps: int = FPS,
        ffmpeg: str = "ffmpeg",
    ):
        self.width = width
        self.height = height
        self.fps = fps
        self.ffmpeg = ffmpeg

    def build_command(self, audio_path: Path, ass_path: Path, output_path: Path) -> List[str]:
        return [
            self.ffmpeg,
            "-y",
            "-f", "lavfi",
            "-i", f"color=c=black:s={self.width}x{self.height}:r={self.fps}",
            "-i", str(audio_path),
            "-vf", f"ass={escape_filter_path(ass_path)}",
            "-shortest",
            "-c:v", "libx264",
            "-pix_fmt", "yuv420p",
            "-c:a", "aac",
            "-b:a", AUDIO_BITRATE,
            str(output_path),
        ]

    def render(self, audio_path: Path, ass_path: Path, output_path: Path) -> Path:
        if shutil.which(self.ffmpeg) is None:
            raise RenderError(f"ffmpeg not found: {self.ffmpeg}")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        cmd = self.build_command(Path(audio_path), Path(ass_path), output_path)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise RenderError(f"Failed to run ffmpeg: {e}")

        if result.returncode != 0:
            detail = (result.stderr or "").strip()[-500:]
            raise RenderError(f"ffmpeg exited with code {result.returncode}: {detail}")

        logger.info(f"Rendered video to {output_path}")
        return output_path
