"""Immutable settings for a single render job."""

import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from ..animation.document import SvgDocument
from ..constants import DEFAULT_FRAMES_DIR, FRAME_FILE_EXTENSION, FRAME_NUMBER_WIDTH

Scene = Callable[[int], SvgDocument]

_RESOLUTION_PATTERN = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


@dataclass(frozen=True, slots=True)
class Resolution:
    """Output size in pixels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Resolution must be positive (got {self.width}x{self.height})")

    @classmethod
    def parse(cls, text: str) -> "Resolution":
        """Parse a ``WIDTHxHEIGHT`` string such as ``3840x2160``."""
        match = _RESOLUTION_PATTERN.match(text)
        if match is None:
            raise ValueError(f"Invalid resolution '{text}'. Expected WIDTHxHEIGHT, e.g. 1920x1080")
        return cls(int(match.group(1)), int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


def frame_count_for(duration: float, framerate: float) -> int:
    """Number of frames covering ``duration`` seconds at ``framerate``."""
    # Rounding first keeps float noise (6.000000000000001) from adding a frame.
    return max(0, math.ceil(round(duration * framerate, 9)))


def frame_filename(frame_index: int) -> str:
    """File name of a frame; numbering is 1-based so frame 0 is ``000001.png``."""
    return f"{frame_index + 1:0{FRAME_NUMBER_WIDTH}d}{FRAME_FILE_EXTENSION}"


def frame_pattern() -> str:
    """printf-style pattern matching every frame file name."""
    return f"%0{FRAME_NUMBER_WIDTH}d{FRAME_FILE_EXTENSION}"


@dataclass(frozen=True)
class RenderConfig:
    """Everything a worker needs to render any frame of the job."""

    resolution: Resolution
    framerate: float
    frame_count: int
    scene: Scene
    frames_dir: Path = Path(DEFAULT_FRAMES_DIR)

    def __post_init__(self) -> None:
        if self.framerate <= 0:
            raise ValueError(f"Framerate must be positive (got {self.framerate})")
        if self.frame_count < 0:
            raise ValueError(f"Frame count must be non-negative (got {self.frame_count})")

    @classmethod
    def for_scene(
        cls,
        resolution: Resolution,
        framerate: float,
        scene: Scene,
        duration: float,
        frames_dir: str | Path = DEFAULT_FRAMES_DIR,
    ) -> "RenderConfig":
        """Build a config whose frame count covers ``duration`` seconds."""
        return cls(
            resolution=resolution,
            framerate=framerate,
            frame_count=frame_count_for(duration, framerate),
            scene=scene,
            frames_dir=Path(frames_dir),
        )

    def frame_path(self, frame_index: int) -> Path:
        return self.frames_dir / frame_filename(frame_index)

    @property
    def input_pattern(self) -> Path:
        return self.frames_dir / frame_pattern()
