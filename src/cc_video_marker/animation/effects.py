"""Progress-driven mutators applied to SVG nodes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .document import SvgNode


def ease_out_quad(progress: float) -> float:
    """Quadratic ease-out over [0, 1]."""
    p = min(max(progress, 0.0), 1.0)
    return 1.0 - (1.0 - p) * (1.0 - p)


class Effect(ABC):
    """Abstract base class for node effects."""

    @abstractmethod
    def apply(self, node: SvgNode, progress: float) -> None:
        """
        Mutate ``node`` to its state at ``progress``.

        Args:
            node: Node of a per-frame document clone
            progress: Position within the effect, 0.0 (start) to 1.0 (settled)
        """
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Fade(Effect):
    """Quadratic opacity ramp from ``start`` to ``end``."""

    start: float = 0.0
    end: float = 1.0

    def apply(self, node: SvgNode, progress: float) -> None:
        eased = ease_out_quad(progress)
        node.opacity = self.start + (self.end - self.start) * eased


@dataclass(frozen=True, slots=True)
class Slide(Effect):
    """Quadratic slide from ``(dx, dy)`` away back to the node's rest position."""

    dx: float = 0.0
    dy: float = 0.0

    def apply(self, node: SvgNode, progress: float) -> None:
        remaining = 1.0 - ease_out_quad(progress)
        node.set_offset(self.dx * remaining, self.dy * remaining)


EFFECT_TYPES: dict[str, type[Effect]] = {
    "fade": Fade,
    "slide": Slide,
}


def supported_effect_names() -> tuple[str, ...]:
    """Return supported effect names in deterministic order."""
    return tuple(EFFECT_TYPES.keys())


def create_effect(name: str, **params: Any) -> Effect:
    """Create an effect instance by name."""
    effect_class = EFFECT_TYPES.get(name.lower())
    if effect_class is None:
        available = ", ".join(supported_effect_names())
        raise ValueError(f"Unknown effect '{name}'. Available: {available}")
    return effect_class(**params)
