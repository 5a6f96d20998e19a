"""Global constants for the application."""

# Video settings
DEFAULT_RESOLUTION = "3840x2160"  # 2160p
DEFAULT_FRAMERATE = 60.0  # Frames per second

# Phase durations in seconds
DEFAULT_DELAY = 0.5  # Intro blank
DEFAULT_INTERVAL = 0.2  # Between introducing each symbol
DEFAULT_ENTRY = 0.2  # Entry animation of each symbol
DEFAULT_SUSTAIN = 1.5  # Symbols on screen
DEFAULT_FADE = 0.5  # Fade to blank
DEFAULT_LEAVE = 0.5  # Outro blank

# Distance in layout units symbols slide up from while entering
SYMBOL_SLIDE_DISTANCE = 60.0

# Frame sequence
DEFAULT_FRAMES_DIR = "frames"
FRAME_NUMBER_WIDTH = 6  # 000001.png
FRAME_FILE_EXTENSION = ".png"
FRAME_PERSIST_ATTEMPTS = 2  # Writes retried on transient I/O errors

# External tools (overridable through the environment)
FFMPEG_BINARY_ENV = "CC_MARKER_FFMPEG"
RSVG_BINARY_ENV = "CC_MARKER_RSVG"
DEFAULT_FFMPEG_BINARY = "ffmpeg"
DEFAULT_RSVG_BINARY = "rsvg-convert"

# Encoder settings
DEFAULT_OUTPUT = "video.mp4"
DEFAULT_VIDEO_CODEC = "libx264"
DEFAULT_CRF = 15
DEFAULT_PIXEL_FORMAT = "yuv420p"
