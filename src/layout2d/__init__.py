"""layout2d - retained-mode 2D layout engine with reactive measures."""

import logging

from .core import (
    AlignX,
    AlignY,
    ContainerNode,
    Entity,
    ImageNode,
    InteractiveNode,
    Measure,
    PointerEvent,
    Positionable,
    Rectangle,
    ShapeNode,
    TextNode,
    align,
    align_x,
    align_y,
)
from .errors import InvalidAlignmentTarget, InvalidValueError, LayoutError
from .interaction import PointerDispatcher
from .layout import Layout, LayoutLoader
from .render import Canvas, EstimatedTextMetrics, Font, PillowSurface, PillowTextMetrics

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AlignX",
    "AlignY",
    "Canvas",
    "ContainerNode",
    "Entity",
    "EstimatedTextMetrics",
    "Font",
    "ImageNode",
    "InteractiveNode",
    "InvalidAlignmentTarget",
    "InvalidValueError",
    "Layout",
    "LayoutError",
    "LayoutLoader",
    "Measure",
    "PillowSurface",
    "PillowTextMetrics",
    "PointerDispatcher",
    "PointerEvent",
    "Positionable",
    "Rectangle",
    "ShapeNode",
    "TextNode",
    "align",
    "align_x",
    "align_y",
]
