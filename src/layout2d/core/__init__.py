"""Core node system: measures, positionable nodes, shapes and containers."""

from .measure import Measure
from .node import Entity, Positionable, ShapeNode
from .shapes import ImageNode, Rectangle, TextNode
from .align import AlignX, AlignY, align, align_x, align_y
from .container import ContainerNode, InteractiveNode, PointerEvent

__all__ = [
    "Measure",
    "Entity",
    "Positionable",
    "ShapeNode",
    "Rectangle",
    "ImageNode",
    "TextNode",
    "AlignX",
    "AlignY",
    "align",
    "align_x",
    "align_y",
    "ContainerNode",
    "InteractiveNode",
    "PointerEvent",
]
