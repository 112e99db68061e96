"""Alignment of nodes relative to a container.

A container can be a drawing surface or canvas (origin 0, extent = its pixel
size), a shape (origin = its x/y, extent = its width/height) or any other
positionable such as an Entity (origin = its x/y, extent 0).

Alignment never assigns coordinates. It computes the pixel delta that puts
the node at the requested position and applies it through move(), so the
node's measure-relative offsets survive and keep tracking their measure.
"""

from __future__ import annotations

import logging
from enum import Enum

from ..errors import InvalidAlignmentTarget, InvalidValueError
from ..render.canvas import Canvas
from ..render.surface import DrawingSurface
from .node import Positionable, ShapeNode
from .shapes import TextNode

logger = logging.getLogger(__name__)

LayoutResult = InvalidValueError | InvalidAlignmentTarget | None


class AlignX(Enum):
    """Horizontal alignment directives."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class AlignY(Enum):
    """Vertical alignment directives."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


# Spellings accepted in addition to the enum values.
ALIASES_X = {"centerx": AlignX.CENTER, "center_x": AlignX.CENTER}
ALIASES_Y = {"centery": AlignY.CENTER, "center_y": AlignY.CENTER}


def parse_align_x(direction: AlignX | str) -> AlignX:
    """Convert a string to an AlignX, raising InvalidValueError if unknown."""
    if isinstance(direction, AlignX):
        return direction
    try:
        key = str(direction).lower()
        return ALIASES_X.get(key) or AlignX(key)
    except ValueError:
        raise InvalidValueError(f"Unknown horizontal alignment: {direction!r}") from None


def parse_align_y(direction: AlignY | str) -> AlignY:
    """Convert a string to an AlignY, raising InvalidValueError if unknown."""
    if isinstance(direction, AlignY):
        return direction
    try:
        key = str(direction).lower()
        return ALIASES_Y.get(key) or AlignY(key)
    except ValueError:
        raise InvalidValueError(f"Unknown vertical alignment: {direction!r}") from None


def container_extent(container) -> tuple[float, float, float, float]:
    """Resolve a container to (origin_x, origin_y, width, height).

    Raises:
        InvalidAlignmentTarget: If the object cannot act as a container
    """
    if isinstance(container, ShapeNode):
        return container.x, container.y, container.width, container.height
    if isinstance(container, Positionable):
        return container.x, container.y, 0, 0
    if isinstance(container, (Canvas, DrawingSurface)):
        return 0, 0, container.width, container.height
    raise InvalidAlignmentTarget(
        f"{type(container).__name__} isn't a valid container to align an element"
    )


def _size(node: Positionable) -> tuple[float, float]:
    if isinstance(node, ShapeNode):
        return node.width, node.height
    return 0, 0


def align_x(direction: AlignX | str | None, node: Positionable, container) -> LayoutResult:
    """Move ``node`` horizontally to ``direction`` within ``container``.

    Returns:
        None on success (or when direction is None), otherwise the error that
        was logged. The node is not moved on error.
    """
    if direction is None:
        return None
    try:
        direction = parse_align_x(direction)
        cx, _, cwidth, _ = container_extent(container)
    except (InvalidValueError, InvalidAlignmentTarget) as error:
        logger.warning("Cannot align %s: %s", getattr(node, "name", node), error)
        return error

    width, _ = _size(node)
    if direction is AlignX.LEFT:
        delta = cx - node.x
    elif direction is AlignX.CENTER:
        delta = (cwidth - width) / 2 - (node.x - cx)
    else:
        delta = (cwidth - width) + (cx - node.x)
    return node.move(0, 0, delta, 0)


def align_y(direction: AlignY | str | None, node: Positionable, container) -> LayoutResult:
    """Move ``node`` vertically to ``direction`` within ``container``.

    Text nodes are anchored on their baseline, so they are biased down by
    their font size.
    """
    if direction is None:
        return None
    try:
        direction = parse_align_y(direction)
        _, cy, _, cheight = container_extent(container)
    except (InvalidValueError, InvalidAlignmentTarget) as error:
        logger.warning("Cannot align %s: %s", getattr(node, "name", node), error)
        return error

    _, height = _size(node)
    bias = node.font_size if isinstance(node, TextNode) else 0
    if direction is AlignY.TOP:
        delta = (cy - node.y) + bias
    elif direction is AlignY.CENTER:
        delta = (cheight - height) / 2 - (node.y - cy) + bias
    else:
        delta = (cheight - height) + (cy - node.y) + bias
    return node.move(0, 0, 0, delta)


def align(direction: str, node: Positionable, container) -> LayoutResult:
    """Align on whichever axis the direction names.

    Accepts ``left``, ``right``, ``top``, ``bottom``, ``centerX`` and
    ``centerY``.
    """
    key = str(getattr(direction, "value", direction)).lower()
    if isinstance(direction, AlignX) or key in ("left", "right") or key in ALIASES_X:
        return align_x(direction, node, container)
    if isinstance(direction, AlignY) or key in ("top", "bottom") or key in ALIASES_Y:
        return align_y(direction, node, container)
    error = InvalidValueError(f"Ambiguous or unknown alignment: {direction!r}")
    logger.warning("Cannot align %s: %s", getattr(node, "name", node), error)
    return error
