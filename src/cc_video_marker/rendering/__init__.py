"""Frame rendering: rasterize scene snapshots into a numbered PNG sequence."""

from .config import (
    RenderConfig,
    Resolution,
    Scene,
    frame_count_for,
    frame_filename,
    frame_pattern,
)
from .frame_renderer import FrameRenderer
from .pipeline import default_worker_count, render_all
from .progress import ProgressCallback, ProgressCounter
from .rasterizer import Rasterizer, RsvgRasterizer, decode_png

__all__ = [
    "FrameRenderer",
    "ProgressCallback",
    "ProgressCounter",
    "Rasterizer",
    "RenderConfig",
    "Resolution",
    "RsvgRasterizer",
    "Scene",
    "decode_png",
    "default_worker_count",
    "frame_count_for",
    "frame_filename",
    "frame_pattern",
    "render_all",
]
