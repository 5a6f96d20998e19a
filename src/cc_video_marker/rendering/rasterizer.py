"""SVG rasterization backends."""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from io import BytesIO

from PIL import Image

from ..animation.document import SvgDocument
from ..constants import DEFAULT_RSVG_BINARY, RSVG_BINARY_ENV
from ..errors import RasterizerError

logger = logging.getLogger(__name__)


class Rasterizer(ABC):
    """Abstract base class for SVG rasterizers."""

    @abstractmethod
    def rasterize(self, document: SvgDocument, height: int) -> Image.Image:
        """
        Render a document scaled to ``height`` pixels, preserving aspect ratio.

        Args:
            document: Document to render
            height: Target height in pixels

        Returns:
            RGBA image of the rendered document

        Raises:
            RasterizerError: If the document cannot be rendered
        """
        raise NotImplementedError


class RsvgRasterizer(Rasterizer):
    """Rasterize by piping SVG markup through ``rsvg-convert``."""

    def __init__(self, binary: str | None = None, timeout: float | None = None):
        """
        Initialize the rasterizer.

        Args:
            binary: Executable to run; defaults to ``$CC_MARKER_RSVG`` or ``rsvg-convert``
            timeout: Seconds to wait for a single frame, or None to wait indefinitely
        """
        self.binary = binary or os.getenv(RSVG_BINARY_ENV) or DEFAULT_RSVG_BINARY
        self.timeout = timeout

    def command(self, height: int) -> list[str]:
        return [self.binary, "--height", str(height), "--format", "png"]

    def rasterize(self, document: SvgDocument, height: int) -> Image.Image:
        cmd = self.command(height)
        markup = document.to_bytes()
        try:
            proc = subprocess.run(
                cmd,
                input=markup,
                capture_output=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise RasterizerError(f"'{self.binary}' not found. Install librsvg or set {RSVG_BINARY_ENV}")
        except subprocess.TimeoutExpired:
            raise RasterizerError(f"'{self.binary}' timed out after {self.timeout}s")
        except OSError as e:
            raise RasterizerError(f"Failed to run '{self.binary}': {e}")

        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace").strip()
            raise RasterizerError(f"'{self.binary}' exited with status {proc.returncode}: {stderr}")

        logger.debug("Rasterized %d bytes of SVG into %d bytes of PNG", len(markup), len(proc.stdout))
        return decode_png(proc.stdout)


def decode_png(data: bytes) -> Image.Image:
    """Decode PNG bytes into a fully loaded RGBA image."""
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            return image.convert("RGBA")
    except (OSError, SyntaxError, Image.DecompressionBombError) as e:
        raise RasterizerError(f"Rasterizer produced an unreadable image: {e}")
