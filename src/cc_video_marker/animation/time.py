"""Time windows for sequencing animation phases."""

from dataclasses import dataclass
from typing import Callable

Action = Callable[["Time"], None]


@dataclass(frozen=True, slots=True)
class Time:
    """
    Seconds elapsed since the start of the currently open window.

    Negative values mean the window has not been reached yet; actions attached
    to such a window are skipped. Every combinator returns the time remaining
    after the window it consumes, so phases chain by plain method calls:

        Time(t).wait(delay).during(sustain, show).until_during(fade, fade, hide)
    """

    seconds: float

    @property
    def active(self) -> bool:
        return self.seconds >= 0.0

    def wait(self, dt: float) -> "Time":
        """Consume ``dt`` seconds without invoking anything."""
        return Time(self.seconds - dt)

    def until(self, dt: float, action: Action) -> "Time":
        """
        Invoke ``action`` with the time clamped to ``dt``, consuming nothing.

        Args:
            dt: Length of the one-shot phase
            action: Called with ``Time(min(self, dt))`` when this time is active

        Returns:
            This time, unchanged
        """
        if self.active:
            action(Time(min(self.seconds, dt)))
        return self

    def during(self, t: float, action: Action) -> "Time":
        """
        Invoke ``action`` with the current time, then consume ``t`` seconds.

        The window is consumed whether or not the action ran, and the action
        keeps being invoked after ``t`` has elapsed so later phases observe
        the settled state of earlier ones.
        """
        if self.active:
            action(self)
        return self.wait(t)

    def until_during(self, dt: float, t: float, action: Action) -> "Time":
        """Run a ``dt``-clamped one-shot inside a consumed window of ``t`` seconds."""
        return self.during(t, lambda time: time.until(dt, action))

    def progress(self, duration: float) -> float:
        """Fraction of ``duration`` elapsed, clamped to [0, 1]; zero-length phases are complete."""
        if duration <= 0.0:
            return 1.0
        return min(max(self.seconds / duration, 0.0), 1.0)
