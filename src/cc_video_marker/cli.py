"""CLI interface for cc-video-marker."""

import logging
import sys
import xml.etree.ElementTree as ET
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeRemainingColumn

from .animation.document import SvgDocument
from .animation.scene import PhaseTimings
from .constants import (
    DEFAULT_DELAY,
    DEFAULT_ENTRY,
    DEFAULT_FADE,
    DEFAULT_FRAMERATE,
    DEFAULT_FRAMES_DIR,
    DEFAULT_INTERVAL,
    DEFAULT_LEAVE,
    DEFAULT_OUTPUT,
    DEFAULT_RESOLUTION,
    DEFAULT_SUSTAIN,
)
from .errors import EncodeError, FrameError, FrameRenderFailed
from .output import EncoderSettings, resolve_encoder, supported_output_formats
from .output.base import VideoEncoder
from .render_job import build_render_config, default_layout_path, encode_frames, render_frames
from .rendering.config import RenderConfig, Resolution
from .rendering.frame_renderer import FrameRenderer

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def main(
    resolution: str = typer.Option(
        DEFAULT_RESOLUTION,
        "--resolution",
        "-r",
        help="Resolution of video as 'WIDTHxHEIGHT'",
    ),
    framerate: float = typer.Option(
        DEFAULT_FRAMERATE,
        "--framerate",
        "-f",
        help="Framerate in units of fps",
    ),
    delay: float = typer.Option(DEFAULT_DELAY, "--delay", "-D", help="Seconds of intro blank"),
    interval: float = typer.Option(
        DEFAULT_INTERVAL, "--interval", "-I", help="Seconds between introducing each symbol"
    ),
    entry: float = typer.Option(
        DEFAULT_ENTRY, "--entry", "-E", help="Seconds of animation for each symbol"
    ),
    sustain: float = typer.Option(
        DEFAULT_SUSTAIN, "--sustain", "-S", help="Seconds of leaving symbols on screen"
    ),
    fade: float = typer.Option(DEFAULT_FADE, "--fade", "-F", help="Seconds of fade to blank"),
    leave: float = typer.Option(DEFAULT_LEAVE, "--leave", "-L", help="Seconds of outro blank"),
    layout: Path | None = typer.Option(
        None,
        "--layout",
        help="SVG layout with 'marker', 'cc', 'by', 'sa' and 'text' node ids (default: bundled layout)",
    ),
    frames_dir: Path = typer.Option(
        Path(DEFAULT_FRAMES_DIR),
        "--frames-dir",
        help="Directory receiving the rendered PNG frames",
    ),
    output: Path = typer.Option(
        Path(DEFAULT_OUTPUT),
        "--output",
        "-o",
        help=f"Output video ({SUPPORTED_OUTPUT_FORMATS_TEXT})",
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        "-j",
        help="Number of frames rendered in parallel (default: CPU count)",
    ),
    frame: int | None = typer.Option(
        None,
        "--frame",
        help="Render only this frame index to a preview PNG",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the encoder before giving up",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    Produce a video which can be used to mark other videos as CC-BY-SA.

    Frames are rendered in parallel into the frames directory, then combined
    into the output video with ffmpeg.

    Examples:
      # 1080p at 30fps
      cc-video-marker -r 1920x1080 -f 30 -o marker.mp4

      # Preview a single frame
      cc-video-marker -r 1280x720 --frame 45
    """
    try:
        _setup_logging(verbose)
        config = _build_config(
            resolution, framerate, delay, interval, entry, sustain, fade, leave, layout, frames_dir
        )

        if frame is not None:
            _preview_frame(config, frame)
            return

        encoder = _resolve_encoder(output, timeout)
        _render(config, encoder, workers)

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _setup_logging(verbose: bool) -> None:
    """Route library logging through rich when debug output is requested."""
    if not verbose:
        return
    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _build_config(
    resolution: str,
    framerate: float,
    delay: float,
    interval: float,
    entry: float,
    sustain: float,
    fade: float,
    leave: float,
    layout: Path | None,
    frames_dir: Path,
) -> RenderConfig:
    """Validate options and build the render job configuration."""
    try:
        size = Resolution.parse(resolution)
        timings = PhaseTimings(
            delay=delay,
            interval=interval,
            entry=entry,
            sustain=sustain,
            fade=fade,
            leave=leave,
        )
        document = _load_layout(layout or default_layout_path())
        return build_render_config(document, size, framerate, timings, frames_dir)
    except ValueError as e:
        raise CLIError(str(e))


def _load_layout(path: Path) -> SvgDocument:
    """Load the SVG layout document."""
    try:
        return SvgDocument.load(path)
    except FileNotFoundError:
        raise CLIError(f"Layout '{path}' not found")
    except ET.ParseError as e:
        raise CLIError(f"Invalid SVG in '{path}': {e}")
    except OSError as e:
        raise CLIError(f"Failed to read layout '{path}': {e}")


def _resolve_encoder(output: Path, timeout: float | None) -> VideoEncoder:
    try:
        return resolve_encoder(output, settings=EncoderSettings(timeout=timeout))
    except ValueError as e:
        raise CLIError(str(e))


def _preview_frame(config: RenderConfig, frame: int) -> None:
    """Render one frame to a standalone PNG."""
    if not 0 <= frame < config.frame_count:
        raise CLIError(f"Frame {frame} is outside the video (0-{config.frame_count - 1})")

    path = Path(f"preview-frame-{frame + 1:06d}.png")
    console.print(f"[bold blue]Previewing frame {frame} ({frame / config.framerate:.3f}s)...[/bold blue]")
    try:
        FrameRenderer(config).preview_frame(frame, path)
    except FrameError as e:
        raise CLIError(str(e))
    console.print(f"[green]✓[/green] PNG saved to {path}")


def _render(config: RenderConfig, encoder: VideoEncoder, workers: int | None) -> None:
    """Render all frames, then encode them into the output video."""
    console.print(
        f"[bold blue]Rendering {config.frame_count} frames at {config.resolution} "
        f"@ {config.framerate:g}fps into {config.frames_dir}...[/bold blue]"
    )

    try:
        with Progress(
            TextColumn("Rendering video frames"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeRemainingColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("frames", total=config.frame_count)
            render_frames(
                config,
                workers=workers,
                on_progress=lambda completed, total: progress.update(task, completed=completed),
            )
    except FrameRenderFailed as e:
        for failure in e.failures:
            err_console.print(f"[red]✗[/red] {failure}")
        raise CLIError(f"{len(e.failures)} of {e.total_frames} frames failed; video not encoded")
    except ValueError as e:
        raise CLIError(str(e))

    console.print(f"[bold blue]Running ffmpeg to convert frames into {encoder.path}...[/bold blue]")
    try:
        path = encode_frames(config, encoder)
    except EncodeError as e:
        raise CLIError(f"Failed to encode video: {e}")
    console.print(f"[green]✓[/green] Video saved to {path}")


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
