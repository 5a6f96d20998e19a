"""Base class for video encoders."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..rendering.config import Resolution


class VideoEncoder(ABC):
    """Abstract base class for encoders turning a frame sequence into a video."""

    def __init__(self, path: str | Path):
        """
        Initialize the encoder with an output file path.

        Args:
            path: Path to the output video
        """
        self.path = Path(path)

    @abstractmethod
    def encode(self, input_pattern: Path, resolution: Resolution, framerate: float) -> Path:
        """
        Encode a persisted frame sequence into the output video.

        Args:
            input_pattern: printf-style pattern locating the frames, e.g. ``frames/%06d.png``
            resolution: Output canvas size
            framerate: Input frames per second

        Returns:
            Path of the written video

        Raises:
            EncodeError: If the video could not be produced
        """
        raise NotImplementedError
