"""Instrumental isolation.

Two backends: an external separator executable invoked as
``<binary> <input.wav> <output.wav>``, or the ``audio-separator``
library (MDX-Net instrumental model) when no executable is configured.
"""

import os
import subprocess
from pathlib import Path
from typing import List, Optional

from ..exceptions import SeparationError
from ..utils.logging import get_logger

logger = get_logger(__name__)

INSTRUMENTAL_NAME = "instrumental.wav"
SEPARATION_MODEL = "UVR-MDX-NET-Inst_HQ_3.onnx"


class AudioSeparator:
    """Separate vocals from a mixed track, returning the instrumental."""

    def __init__(self, binary: Optional[Path] = None):
        self.binary = Path(binary) if binary else None

    def separate(self, input_wav: Path, output_dir: Optional[Path] = None) -> Path:
        input_wav = Path(input_wav)
        output_dir = Path(output_dir) if output_dir else input_wav.parent
        output_dir.mkdir(parents=True, exist_ok=True)

        if not input_wav.exists():
            raise SeparationError(f"Input audio not found: {input_wav}")

        if self.binary:
            return self._run_binary(input_wav, output_dir / INSTRUMENTAL_NAME)
        return self._run_library(input_wav, output_dir)

    def _run_binary(self, input_wav: Path, output_wav: Path) -> Path:
        cmd = [str(self.binary), str(input_wav), str(output_wav)]
        logger.debug(f"Running separator: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise SeparationError(f"Cannot run separator {self.binary}: {e}")

        if result.returncode != 0:
            detail = (result.stderr or "").strip()[-500:]
            raise SeparationError(
                f"Separator exited with code {result.returncode}: {detail}"
            )
        if not output_wav.exists():
            raise SeparationError(f"Separator produced no output at {output_wav}")

        return output_wav

    def _run_library(self, input_wav: Path, output_dir: Path) -> Path:
        try:
            from audio_separator.separator import Separator

            separator = Separator(output_dir=str(output_dir), output_format="wav")
            separator.load_model(model_filename=SEPARATION_MODEL)
            output_files = separator.separate(str(input_wav))
        except ImportError as e:
            raise SeparationError(
                f"audio-separator is not installed and no separator binary is configured: {e}"
            )
        except Exception as e:
            raise SeparationError(f"Vocal separation failed: {e}")

        return self._pick_instrumental(output_files, output_dir)

    def _pick_instrumental(self, output_files: List[str], output_dir: Path) -> Path:
        paths = [
            Path(f) if os.path.isabs(f) else output_dir / f for f in output_files
        ]
        for path in paths:
            name = path.name.lower()
            if "instrumental" in name or "no_vocals" in name:
                logger.debug(f"Instrumental: {path}")
                return path

        raise SeparationError(f"No instrumental stem in output: {output_files}")
