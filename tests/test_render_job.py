"""End-to-end tests for the render job with stand-in external tools."""

import pytest

from cc_video_marker.animation import PhaseTimings
from cc_video_marker.errors import EncodeExitError, FrameRenderFailed
from cc_video_marker.output import FfmpegEncoder
from cc_video_marker.render_job import (
    build_render_config,
    default_layout_path,
    prepare_frames_dir,
    render_video,
)
from cc_video_marker.rendering import RenderConfig, Resolution

from conftest import RecordingRunner, StripeRasterizer, TaggedScene


def test_bundled_layout_exists():
    assert default_layout_path().is_file()


def test_short_job_renders_six_frames_and_encodes_once(tmp_path, layout, short_timings):
    frames_dir = tmp_path / "frames"
    output = tmp_path / "video.mp4"
    runner = RecordingRunner()
    config = build_render_config(layout, Resolution.parse("100x100"), 10.0, short_timings, frames_dir)

    result = render_video(
        config,
        output,
        rasterizer=StripeRasterizer(),
        encoder=FfmpegEncoder(output, runner=runner),
        workers=4,
    )

    assert result == output
    assert sorted(path.name for path in frames_dir.iterdir()) == [
        f"{index:06d}.png" for index in range(1, 7)
    ]
    assert len(runner.calls) == 1
    cmd = runner.calls[0]
    assert cmd[cmd.index("-framerate") + 1] == "10"
    assert cmd[cmd.index("-s") + 1] == "100x100"
    assert cmd[cmd.index("-i") + 1] == str(frames_dir / "%06d.png")


def test_frame_failure_never_invokes_encoder(tmp_path, layout, short_timings):
    runner = RecordingRunner()
    base = build_render_config(layout, Resolution(32, 32), 10.0, short_timings, tmp_path / "frames")
    config = RenderConfig(base.resolution, base.framerate, 10, TaggedScene(base.scene), base.frames_dir)
    output = tmp_path / "video.mp4"

    with pytest.raises(FrameRenderFailed) as excinfo:
        render_video(
            config,
            output,
            rasterizer=StripeRasterizer(fail_frames={3}),
            encoder=FfmpegEncoder(output, runner=runner),
        )

    assert excinfo.value.first.frame_index == 3
    assert runner.calls == []
    assert not output.exists()


def test_encode_failure_is_distinct_from_frame_failure(tmp_path, layout, short_timings):
    output = tmp_path / "video.mp4"
    config = build_render_config(layout, Resolution(32, 32), 10.0, short_timings, tmp_path / "frames")

    with pytest.raises(EncodeExitError):
        render_video(
            config,
            output,
            rasterizer=StripeRasterizer(),
            encoder=FfmpegEncoder(output, runner=RecordingRunner(returncode=1, stderr="boom")),
        )


def test_stale_frames_from_longer_run_are_removed(tmp_path, layout, short_timings, default_timings):
    frames_dir = tmp_path / "frames"
    output = tmp_path / "video.mp4"
    long_job = build_render_config(layout, Resolution(16, 16), 10.0, default_timings, frames_dir)
    short_job = build_render_config(layout, Resolution(16, 16), 10.0, short_timings, frames_dir)

    for config in (long_job, short_job):
        render_video(
            config,
            output,
            rasterizer=StripeRasterizer(),
            encoder=FfmpegEncoder(output, runner=RecordingRunner()),
        )

    assert len(list(frames_dir.iterdir())) == 6


def test_prepare_frames_dir_keeps_unrelated_files(tmp_path):
    frames_dir = tmp_path / "frames"
    frames_dir.mkdir()
    (frames_dir / "000001.png").write_bytes(b"old")
    (frames_dir / "notes.txt").write_text("keep me")
    (frames_dir / "cover.png").write_bytes(b"keep")

    prepare_frames_dir(frames_dir)

    assert sorted(path.name for path in frames_dir.iterdir()) == ["cover.png", "notes.txt"]


def test_zero_duration_job_is_rejected(tmp_path, layout):
    timings = PhaseTimings(delay=0.0, interval=0.0, entry=0.0, sustain=0.0, fade=0.0, leave=0.0)
    config = build_render_config(layout, Resolution(16, 16), 10.0, timings, tmp_path / "frames")
    runner = RecordingRunner()

    with pytest.raises(ValueError, match="zero frames"):
        render_video(
            config,
            tmp_path / "video.mp4",
            rasterizer=StripeRasterizer(),
            encoder=FfmpegEncoder(tmp_path / "video.mp4", runner=runner),
        )

    assert runner.calls == []


def test_unsupported_output_fails_before_rendering(tmp_path, layout, short_timings):
    frames_dir = tmp_path / "frames"
    config = build_render_config(layout, Resolution(16, 16), 10.0, short_timings, frames_dir)

    with pytest.raises(ValueError, match="Unsupported output format"):
        render_video(config, tmp_path / "video.gif", rasterizer=StripeRasterizer())

    assert not frames_dir.exists()
