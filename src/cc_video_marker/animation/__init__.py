"""Animation of the marker layout: time windows, effects and scene composition."""

from .document import SvgDocument, SvgNode
from .effects import (
    EFFECT_TYPES,
    Effect,
    Fade,
    Slide,
    create_effect,
    ease_out_quad,
    supported_effect_names,
)
from .scene import (
    DEFAULT_CAPTION,
    DEFAULT_ENVELOPE,
    DEFAULT_SYMBOLS,
    AnimatedNode,
    MarkerScene,
    PhaseTimings,
)
from .time import Action, Time

__all__ = [
    "Action",
    "AnimatedNode",
    "DEFAULT_CAPTION",
    "DEFAULT_ENVELOPE",
    "DEFAULT_SYMBOLS",
    "EFFECT_TYPES",
    "Effect",
    "Fade",
    "MarkerScene",
    "PhaseTimings",
    "Slide",
    "SvgDocument",
    "SvgNode",
    "Time",
    "create_effect",
    "ease_out_quad",
    "supported_effect_names",
]
