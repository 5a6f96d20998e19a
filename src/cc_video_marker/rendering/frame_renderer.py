"""Renderer turning scene snapshots into PNG frame files using Pillow."""

import logging
from pathlib import Path

from PIL import Image

from ..constants import FRAME_PERSIST_ATTEMPTS
from ..errors import (
    FrameAllocationError,
    FramePersistenceError,
    FrameRasterizationError,
    RasterizerError,
)
from .config import RenderConfig
from .rasterizer import Rasterizer, RsvgRasterizer

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class FrameRenderer:
    """Renders individual frames of a render job."""

    def __init__(
        self,
        config: RenderConfig,
        rasterizer: Rasterizer | None = None,
        persist_attempts: int = FRAME_PERSIST_ATTEMPTS,
    ):
        """
        Initialize renderer.

        Args:
            config: The render job configuration
            rasterizer: SVG backend; defaults to ``rsvg-convert``
            persist_attempts: Tries for writing a frame before giving up
        """
        self.config = config
        self.rasterizer = rasterizer or RsvgRasterizer()
        self.persist_attempts = max(1, persist_attempts)

    def render_frame(self, frame_index: int) -> Path:
        """
        Render a frame and save it into the frames directory.

        Args:
            frame_index: 0-based frame index

        Returns:
            Path of the written PNG file

        Raises:
            FrameAllocationError: If the pixel buffer cannot be created
            FrameRasterizationError: If the snapshot cannot be rendered
            FramePersistenceError: If the file cannot be written
        """
        return self.preview_frame(frame_index, self.config.frame_path(frame_index))

    def preview_frame(self, frame_index: int, path: str | Path) -> Path:
        """Render a frame and save it to an arbitrary path."""
        image = self.render_image(frame_index)
        return self._persist(frame_index, image, Path(path))

    def render_image(self, frame_index: int) -> Image.Image:
        """Render a frame into an RGBA image of the configured resolution."""
        document = self.config.scene(frame_index)
        buffer = self._allocate(frame_index)

        try:
            rendered = self.rasterizer.rasterize(document, self.config.resolution.height)
        except RasterizerError as e:
            raise FrameRasterizationError(frame_index, str(e))

        # Fit-to-height output may be wider than the canvas; the overflow is clipped.
        width = min(rendered.width, buffer.width)
        height = min(rendered.height, buffer.height)
        overlay = rendered.convert("RGBA").crop((0, 0, width, height))
        buffer.alpha_composite(overlay)
        return buffer

    def _allocate(self, frame_index: int) -> Image.Image:
        width = self.config.resolution.width
        height = self.config.resolution.height
        if width <= 0 or height <= 0:
            raise FrameAllocationError(frame_index, f"invalid dimensions {width}x{height}")
        try:
            return Image.new("RGBA", (width, height), TRANSPARENT)
        except (ValueError, MemoryError) as e:
            raise FrameAllocationError(frame_index, f"cannot allocate {width}x{height} buffer: {e}")

    def _persist(self, frame_index: int, image: Image.Image, path: Path) -> Path:
        error: OSError | None = None
        for attempt in range(1, self.persist_attempts + 1):
            try:
                image.save(path, format="PNG")
                return path
            except OSError as e:
                error = e
                logger.warning(
                    "Writing frame %d to %s failed (attempt %d/%d): %s",
                    frame_index, path, attempt, self.persist_attempts, e,
                )
        raise FramePersistenceError(frame_index, f"cannot write {path}: {error}")
