"""Drawing surfaces, paint layers and text metrics."""

from .metrics import EstimatedTextMetrics, PillowTextMetrics, TextMetrics
from .surface import DrawingSurface, Font, PillowSurface
from .canvas import Canvas

__all__ = [
    "Canvas",
    "DrawingSurface",
    "EstimatedTextMetrics",
    "Font",
    "PillowSurface",
    "PillowTextMetrics",
    "TextMetrics",
]
