"""cc-video-marker: render a short clip marking videos as CC-BY-SA content."""

__version__ = "1.0.0"
