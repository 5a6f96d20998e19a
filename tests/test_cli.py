"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from cc_video_marker import cli
from cc_video_marker.cli import app
from cc_video_marker.errors import RasterizerError
from cc_video_marker.output import FfmpegEncoder

from conftest import RecordingRunner, StripeRasterizer

runner = CliRunner()

SHORT_JOB = ["-r", "32x18", "-f", "10", "-D", "0", "-I", "0.1", "-E", "0.1", "-S", "0.5", "-F", "0.1", "-L", "0"]


@pytest.fixture
def fake_tools(monkeypatch, tmp_path):
    """Replace rsvg-convert and ffmpeg with in-process stand-ins."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("cc_video_marker.rendering.frame_renderer.RsvgRasterizer", StripeRasterizer)
    encode_runner = RecordingRunner()

    def resolve(output, timeout):
        return FfmpegEncoder(output, runner=encode_runner)

    monkeypatch.setattr(cli, "_resolve_encoder", resolve)
    return encode_runner


def test_invalid_resolution():
    result = runner.invoke(app, ["-r", "1920by1080"])
    assert result.exit_code == 1
    assert "Invalid resolution" in (result.stdout + result.stderr)


def test_negative_duration():
    result = runner.invoke(app, ["-S", "-1"])
    assert result.exit_code == 1
    assert "must be non-negative" in (result.stdout + result.stderr)


def test_non_positive_framerate():
    result = runner.invoke(app, ["-f", "0"])
    assert result.exit_code == 1
    assert "Framerate must be positive" in (result.stdout + result.stderr)


def test_unsupported_output_format(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["-o", "video.gif"])
    assert result.exit_code == 1
    assert "Unsupported output format" in (result.stdout + result.stderr)
    # Nothing is rendered for an output that cannot be encoded.
    assert not (tmp_path / "frames").exists()


def test_missing_layout(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["--layout", "missing.svg"])
    assert result.exit_code == 1
    assert "not found" in (result.stdout + result.stderr)


def test_layout_without_required_nodes(tmp_path):
    layout = tmp_path / "layout.svg"
    layout.write_text('<svg xmlns="http://www.w3.org/2000/svg"><g id="marker"/></svg>')

    result = runner.invoke(app, ["--layout", str(layout)])

    assert result.exit_code == 1
    assert "missing required node ids" in (result.stdout + result.stderr)


def test_preview_frame_outside_video():
    result = runner.invoke(app, ["--frame", "9999"])
    assert result.exit_code == 1
    assert "outside the video" in (result.stdout + result.stderr)


def test_preview_frame_writes_single_png(fake_tools, tmp_path):
    result = runner.invoke(app, [*SHORT_JOB, "--frame", "3"])

    assert result.exit_code == 0
    assert (tmp_path / "preview-frame-000004.png").exists()
    assert not (tmp_path / "frames").exists()
    assert fake_tools.calls == []


def test_render_and_encode(fake_tools, tmp_path):
    result = runner.invoke(app, [*SHORT_JOB, "-j", "2", "-o", "marker.mp4"])

    assert result.exit_code == 0
    assert len(list((tmp_path / "frames").glob("*.png"))) == 6
    assert len(fake_tools.calls) == 1
    assert (tmp_path / "marker.mp4").exists()


def test_frame_failure_skips_encoding(fake_tools, tmp_path, monkeypatch):
    class BrokenRasterizer(StripeRasterizer):
        def rasterize(self, document, height):
            raise RasterizerError("malformed content")

    monkeypatch.setattr("cc_video_marker.rendering.frame_renderer.RsvgRasterizer", BrokenRasterizer)

    result = runner.invoke(app, [*SHORT_JOB, "-j", "1"])

    assert result.exit_code == 1
    output = result.stdout + result.stderr
    assert "video not encoded" in output
    assert "rasterization failure" in output
    assert fake_tools.calls == []


def test_encoder_failure_is_reported(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("cc_video_marker.rendering.frame_renderer.RsvgRasterizer", StripeRasterizer)
    monkeypatch.setattr(
        cli,
        "_resolve_encoder",
        lambda output, timeout: FfmpegEncoder(output, runner=RecordingRunner(returncode=1, stderr="bad codec")),
    )

    result = runner.invoke(app, SHORT_JOB)

    assert result.exit_code == 1
    assert "Failed to encode video" in (result.stdout + result.stderr)
