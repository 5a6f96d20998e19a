"""Video encoders for the rendered frame sequence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .base import VideoEncoder
from .ffmpeg_encoder import EncoderSettings, FfmpegEncoder, format_framerate


@dataclass(frozen=True)
class OutputFormatSpec:
    extension: str
    encoder_class: type[VideoEncoder]


_OUTPUT_FORMATS: dict[str, OutputFormatSpec] = {
    "mp4": OutputFormatSpec(
        extension=".mp4",
        encoder_class=FfmpegEncoder,
    ),
    "mkv": OutputFormatSpec(
        extension=".mkv",
        encoder_class=FfmpegEncoder,
    ),
    "mov": OutputFormatSpec(
        extension=".mov",
        encoder_class=FfmpegEncoder,
    ),
}


def resolve_encoder(file_path: str | Path, **options: Any) -> VideoEncoder:
    """
    Resolve the encoder for an output path based on its extension.

    Args:
        file_path: Output video path (extension determines the container)
        **options: Extra keyword arguments for the encoder class

    Returns:
        A VideoEncoder instance

    Raises:
        ValueError: If the file extension is not supported
    """
    ext = Path(file_path).suffix.lower()
    spec = _output_spec_from_extension(ext)
    return spec.encoder_class(file_path, **options)


def supported_output_formats() -> tuple[str, ...]:
    """Return supported output format names."""
    return tuple(_OUTPUT_FORMATS.keys())


def _output_spec_from_extension(ext: str) -> OutputFormatSpec:
    output_format = ext.removeprefix(".")
    spec = _OUTPUT_FORMATS.get(output_format)
    if spec is not None:
        return spec
    supported = ", ".join(spec.extension for spec in _OUTPUT_FORMATS.values())
    raise ValueError(f"Unsupported output format: {ext or '(none)'}. Supported formats: {supported}")


__all__ = [
    "OutputFormatSpec",
    "VideoEncoder",
    "EncoderSettings",
    "FfmpegEncoder",
    "format_framerate",
    "resolve_encoder",
    "supported_output_formats",
]
