"""Exceptions raised while rendering frames and encoding the video."""

from enum import Enum


class MarkerError(Exception):
    """Base exception for render job failures."""
    pass


class RasterizerError(MarkerError):
    """The rasterizer could not turn a document into pixels."""
    pass


class FrameFailureKind(str, Enum):
    """Stage of frame rendering that failed."""

    ALLOCATION = "allocation"
    RASTERIZATION = "rasterization"
    PERSISTENCE = "persistence"


class FrameError(MarkerError):
    """A single frame failed to render."""

    kind: FrameFailureKind

    def __init__(self, frame_index: int, message: str):
        super().__init__(f"Frame {frame_index}: {self.kind.value} failure: {message}")
        self.frame_index = frame_index
        self.reason = message


class FrameAllocationError(FrameError):
    kind = FrameFailureKind.ALLOCATION


class FrameRasterizationError(FrameError):
    kind = FrameFailureKind.RASTERIZATION


class FramePersistenceError(FrameError):
    kind = FrameFailureKind.PERSISTENCE


class FrameRenderFailed(MarkerError):
    """One or more frames failed; failures are ordered by frame index."""

    def __init__(self, failures: list[FrameError], total_frames: int):
        self.failures = sorted(failures, key=lambda failure: failure.frame_index)
        self.total_frames = total_frames
        first = self.failures[0]
        super().__init__(
            f"{len(self.failures)} of {total_frames} frames failed to render; "
            f"first failure: {first}"
        )

    @property
    def first(self) -> FrameError:
        return self.failures[0]


class EncodeError(MarkerError):
    """The external encoder did not produce the video."""
    pass


class EncodeLaunchError(EncodeError):
    """The encoder process could not be started."""
    pass


class EncodeExitError(EncodeError):
    """The encoder process exited with a non-zero status."""

    def __init__(self, returncode: int, stderr: str = ""):
        message = f"Encoder exited with status {returncode}"
        if stderr:
            message = f"{message}:\n{stderr}"
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class EncodeTimeoutError(EncodeError):
    """The encoder process did not finish in time."""
    pass


class EncodeOutputMissingError(EncodeError):
    """The encoder reported success but left no output file."""
    pass
