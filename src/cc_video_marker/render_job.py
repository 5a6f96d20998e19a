"""Shared render orchestration used by the CLI entry point."""

import logging
import re
from pathlib import Path

from .animation.document import SvgDocument
from .animation.scene import MarkerScene, PhaseTimings
from .constants import DEFAULT_FRAMES_DIR, FRAME_FILE_EXTENSION, FRAME_NUMBER_WIDTH
from .output import resolve_encoder
from .output.base import VideoEncoder
from .rendering.config import RenderConfig, Resolution
from .rendering.pipeline import render_all
from .rendering.progress import ProgressCallback
from .rendering.rasterizer import Rasterizer

logger = logging.getLogger(__name__)

_FRAME_FILE = re.compile(rf"^\d{{{FRAME_NUMBER_WIDTH}}}{re.escape(FRAME_FILE_EXTENSION)}$")


def default_layout_path() -> Path:
    """Path of the layout bundled with the package."""
    return Path(__file__).parent / "assets" / "layout.svg"


def build_render_config(
    layout: SvgDocument,
    resolution: Resolution,
    framerate: float,
    timings: PhaseTimings,
    frames_dir: str | Path = DEFAULT_FRAMES_DIR,
) -> RenderConfig:
    """Build the scene for a layout and a config covering its full duration."""
    scene = MarkerScene(layout, framerate, timings)
    return RenderConfig.for_scene(
        resolution=resolution,
        framerate=framerate,
        scene=scene,
        duration=scene.duration,
        frames_dir=frames_dir,
    )


def prepare_frames_dir(frames_dir: Path) -> None:
    """Create the frames directory and remove frames left over from earlier runs."""
    frames_dir.mkdir(parents=True, exist_ok=True)
    stale = [path for path in frames_dir.iterdir() if _FRAME_FILE.match(path.name)]
    for path in stale:
        path.unlink()
    if stale:
        logger.debug("Removed %d stale frames from %s", len(stale), frames_dir)


def render_frames(
    config: RenderConfig,
    *,
    rasterizer: Rasterizer | None = None,
    workers: int | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[Path]:
    """
    Render every frame of the job into a clean frames directory.

    Raises:
        ValueError: If the job has no frames
        FrameRenderFailed: If any frame failed to render
    """
    if config.frame_count == 0:
        raise ValueError("Nothing to render: the total duration covers zero frames")
    prepare_frames_dir(config.frames_dir)
    return render_all(config, rasterizer, workers=workers, on_progress=on_progress)


def encode_frames(config: RenderConfig, encoder: VideoEncoder) -> Path:
    """Encode the frames written by ``render_frames`` into the encoder's output path."""
    return encoder.encode(config.input_pattern, config.resolution, config.framerate)


def render_video(
    config: RenderConfig,
    output_path: str | Path,
    *,
    rasterizer: Rasterizer | None = None,
    encoder: VideoEncoder | None = None,
    workers: int | None = None,
    on_progress: ProgressCallback | None = None,
) -> Path:
    """
    Render every frame of the job, then encode them into one video.

    The encoder only runs once every frame has been written.

    Raises:
        ValueError: If the job has no frames or the output format is unsupported
        FrameRenderFailed: If any frame failed to render
        EncodeError: If the encoder did not produce the video
    """
    target_encoder = encoder or resolve_encoder(output_path)
    render_frames(config, rasterizer=rasterizer, workers=workers, on_progress=on_progress)
    return encode_frames(config, target_encoder)
