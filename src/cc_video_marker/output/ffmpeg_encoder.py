"""ffmpeg video encoder."""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from ..constants import (
    DEFAULT_CRF,
    DEFAULT_FFMPEG_BINARY,
    DEFAULT_PIXEL_FORMAT,
    DEFAULT_VIDEO_CODEC,
    FFMPEG_BINARY_ENV,
)
from ..errors import (
    EncodeExitError,
    EncodeLaunchError,
    EncodeOutputMissingError,
    EncodeTimeoutError,
)
from ..rendering.config import Resolution
from .base import VideoEncoder

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[Any]"]

STDERR_TAIL_LINES = 20


@dataclass(frozen=True, slots=True)
class EncoderSettings:
    """Codec parameters handed to ffmpeg."""

    codec: str = DEFAULT_VIDEO_CODEC
    crf: int = DEFAULT_CRF
    pixel_format: str = DEFAULT_PIXEL_FORMAT
    binary: str | None = None
    timeout: float | None = None

    def resolve_binary(self) -> str:
        return self.binary or os.getenv(FFMPEG_BINARY_ENV) or DEFAULT_FFMPEG_BINARY


def format_framerate(framerate: float) -> str:
    """Format a framerate without a trailing ``.0`` (``10.0`` -> ``10``)."""
    text = f"{framerate:.6f}".rstrip("0").rstrip(".")
    return text or "0"


class FfmpegEncoder(VideoEncoder):
    """Encode a PNG sequence with the external ``ffmpeg`` process."""

    def __init__(
        self,
        path: str | Path,
        settings: EncoderSettings | None = None,
        runner: Runner = subprocess.run,
    ):
        """
        Initialize the encoder.

        Args:
            path: Path to the output video
            settings: Codec parameters; defaults to H.264 at CRF 15, yuv420p
            runner: ``subprocess.run`` compatible callable used to launch ffmpeg
        """
        super().__init__(path)
        self.settings = settings or EncoderSettings()
        self.runner = runner

    def command(self, input_pattern: Path, resolution: Resolution, framerate: float) -> list[str]:
        return [
            self.settings.resolve_binary(),
            "-framerate", format_framerate(framerate),
            "-s", f"{resolution.width}x{resolution.height}",
            "-i", str(input_pattern),
            "-y",
            "-vcodec", self.settings.codec,
            "-crf", str(self.settings.crf),
            "-pix_fmt", self.settings.pixel_format,
            str(self.path),
        ]

    def encode(self, input_pattern: Path, resolution: Resolution, framerate: float) -> Path:
        cmd = self.command(input_pattern, resolution, framerate)
        binary = cmd[0]
        logger.debug("Running %s", " ".join(cmd))

        try:
            proc = self.runner(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.settings.timeout,
            )
        except subprocess.TimeoutExpired:
            raise EncodeTimeoutError(f"'{binary}' did not finish within {self.settings.timeout}s")
        except FileNotFoundError:
            raise EncodeLaunchError(f"'{binary}' not found. Install ffmpeg or set {FFMPEG_BINARY_ENV}")
        except OSError as e:
            raise EncodeLaunchError(f"Failed to launch '{binary}': {e}")

        if proc.returncode != 0:
            raise EncodeExitError(proc.returncode, _tail(proc.stderr or ""))

        if not self.path.is_file() or self.path.stat().st_size == 0:
            raise EncodeOutputMissingError(f"'{binary}' exited cleanly but {self.path} was not written")
        return self.path


def _tail(text: str, lines: int = STDERR_TAIL_LINES) -> str:
    return "\n".join(text.strip().splitlines()[-lines:])
