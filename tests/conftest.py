"""Shared fixtures and test doubles for external tools."""

import subprocess
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from cc_video_marker.animation import MarkerScene, PhaseTimings, SvgDocument
from cc_video_marker.errors import RasterizerError
from cc_video_marker.render_job import default_layout_path
from cc_video_marker.rendering import Rasterizer

STRIPE_NODES = ("cc", "by", "sa", "text", "marker")


class StripeRasterizer(Rasterizer):
    """Draws one grey stripe per animated node, brightness following its opacity."""

    def __init__(self, fail_frames: set[int] | None = None):
        self.fail_frames = fail_frames or set()

    def rasterize(self, document: SvgDocument, height: int) -> Image.Image:
        frame = document.root.get("data-frame")
        if frame is not None and int(frame) in self.fail_frames:
            raise RasterizerError(f"malformed content in frame {frame}")

        width = height * 16 // 9
        image = Image.new("RGBA", (width, height), (0, 0, 0, 255))
        draw = ImageDraw.Draw(image)
        stripe = max(1, width // len(STRIPE_NODES))
        for index, node_id in enumerate(STRIPE_NODES):
            level = round(document.node_by_id(node_id).opacity * 255)
            draw.rectangle(
                [index * stripe, 0, (index + 1) * stripe - 1, height - 1],
                fill=(level, level, level, 255),
            )
        return image


class TaggedScene:
    """Wraps a scene and tags each snapshot with its frame index."""

    def __init__(self, scene: MarkerScene):
        self.scene = scene

    @property
    def duration(self) -> float:
        return self.scene.duration

    def __call__(self, frame_index: int) -> SvgDocument:
        document = self.scene(frame_index)
        document.root.set("data-frame", str(frame_index))
        return document


class RecordingRunner:
    """Stands in for subprocess.run when launching the encoder."""

    def __init__(self, returncode: int = 0, stderr: str = "", write_output: bool = True):
        self.returncode = returncode
        self.stderr = stderr
        self.write_output = write_output
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, object]] = []

    def __call__(self, cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        if self.write_output and self.returncode == 0:
            Path(cmd[-1]).write_bytes(b"\x00\x00\x00\x18ftypisom")
        return subprocess.CompletedProcess(cmd, self.returncode, stdout=None, stderr=self.stderr)


@pytest.fixture
def layout() -> SvgDocument:
    return SvgDocument.load(default_layout_path())


@pytest.fixture
def default_timings() -> PhaseTimings:
    return PhaseTimings(delay=0.5, interval=0.2, entry=0.2, sustain=1.5, fade=0.5, leave=0.5)


@pytest.fixture
def short_timings() -> PhaseTimings:
    return PhaseTimings(delay=0.0, interval=0.1, entry=0.1, sustain=0.5, fade=0.1, leave=0.0)


@pytest.fixture(autouse=True)
def _clear_tool_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CC_MARKER_FFMPEG", raising=False)
    monkeypatch.delenv("CC_MARKER_RSVG", raising=False)
