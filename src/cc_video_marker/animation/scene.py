"""Scene composition: frame index to a fully animated SVG snapshot."""

from dataclasses import dataclass, fields

from ..constants import SYMBOL_SLIDE_DISTANCE
from .document import SvgDocument
from .effects import Effect, Fade, Slide
from .time import Action, Time


@dataclass(frozen=True, slots=True)
class PhaseTimings:
    """Phase durations in seconds."""

    delay: float
    interval: float
    entry: float
    sustain: float
    fade: float
    leave: float

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if value < 0:
                raise ValueError(f"Phase duration '{field.name}' must be non-negative (got {value})")

    @property
    def total(self) -> float:
        """Video length in seconds; symbol entries are staggered inside ``sustain``."""
        return self.delay + self.sustain + self.fade + self.leave


@dataclass(frozen=True, slots=True)
class AnimatedNode:
    """A named node and the effects driven by its phase progress."""

    node_id: str
    effects: tuple[Effect, ...]

    def apply(self, document: SvgDocument, progress: float) -> None:
        node = document.node_by_id(self.node_id)
        for effect in self.effects:
            effect.apply(node, progress)


_SYMBOL_ENTRY = (Fade(0.0, 1.0), Slide(0.0, SYMBOL_SLIDE_DISTANCE))

DEFAULT_SYMBOLS = (
    AnimatedNode("cc", _SYMBOL_ENTRY),
    AnimatedNode("by", _SYMBOL_ENTRY),
    AnimatedNode("sa", _SYMBOL_ENTRY),
)
DEFAULT_CAPTION = AnimatedNode("text", (Fade(0.0, 1.0),))
DEFAULT_ENVELOPE = AnimatedNode("marker", (Fade(1.0, 0.0),))


class MarkerScene:
    """
    Callable scene producing one SVG snapshot per frame index.

    The template is shared read-only; every call works on its own deep clone,
    so the scene may be called from several threads at once.
    """

    def __init__(
        self,
        template: SvgDocument,
        framerate: float,
        timings: PhaseTimings,
        symbols: tuple[AnimatedNode, ...] = DEFAULT_SYMBOLS,
        caption: AnimatedNode | None = DEFAULT_CAPTION,
        envelope: AnimatedNode | None = DEFAULT_ENVELOPE,
    ):
        """
        Initialize the scene.

        Args:
            template: Layout document; never mutated
            framerate: Frames per second used to map frame indices to seconds
            timings: Phase durations
            symbols: Nodes entering one after another, ``interval`` seconds apart
            caption: Node entering after the last symbol, if any
            envelope: Node faded out after ``sustain``, if any

        Raises:
            ValueError: If the framerate is not positive or a node id is missing
        """
        if framerate <= 0:
            raise ValueError(f"Framerate must be positive (got {framerate})")

        self.template = template
        self.framerate = framerate
        self.timings = timings
        self.symbols = symbols
        self.caption = caption
        self.envelope = envelope

        missing = [
            animated.node_id
            for animated in self._animated_nodes()
            if not template.has_node(animated.node_id)
        ]
        if missing:
            raise ValueError(f"Layout is missing required node ids: {', '.join(missing)}")

    @property
    def duration(self) -> float:
        return self.timings.total

    def time_at(self, frame_index: int) -> Time:
        return Time(frame_index / self.framerate)

    def __call__(self, frame_index: int) -> SvgDocument:
        document = self.template.clone()
        timings = self.timings

        # Nodes whose entry has not started yet still show their pre-entry state.
        for animated in self._entering_nodes():
            animated.apply(document, 0.0)

        def sustain(time: Time) -> None:
            for symbol in self.symbols:
                time = time.until_during(
                    timings.entry, timings.interval, self._animate(document, symbol, timings.entry)
                )
            if self.caption is not None:
                time.until(timings.entry, self._animate(document, self.caption, timings.entry))

        (
            self.time_at(frame_index)
            .wait(timings.delay)
            .during(timings.sustain, sustain)
            .until_during(timings.fade, timings.fade, self._animate(document, self.envelope, timings.fade))
            .wait(timings.leave)
        )
        return document

    def _animate(
        self, document: SvgDocument, animated: AnimatedNode | None, duration: float
    ) -> Action:
        def action(time: Time) -> None:
            if animated is not None:
                animated.apply(document, time.progress(duration))

        return action

    def _entering_nodes(self) -> tuple[AnimatedNode, ...]:
        if self.caption is None:
            return self.symbols
        return (*self.symbols, self.caption)

    def _animated_nodes(self) -> tuple[AnimatedNode, ...]:
        if self.envelope is None:
            return self._entering_nodes()
        return (*self._entering_nodes(), self.envelope)
