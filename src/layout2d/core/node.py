"""Positionable nodes: the coordinate algebra shared by every node."""

from __future__ import annotations

import itertools
import logging
import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterator

from ..errors import InvalidValueError
from .measure import Measure, is_number, resolve

if TYPE_CHECKING:
    from ..render.surface import DrawingSurface
    from .container import ContainerNode

logger = logging.getLogger(__name__)

Color = str | tuple[int, ...]
Size = float | Measure

_ids = itertools.count(1)
_insertions = itertools.count(1)


def _require_number(name: str, value: Any) -> None:
    if not is_number(value):
        raise InvalidValueError(f"{name} must be a number, got {value!r}")


def _require_size(name: str, value: Any) -> None:
    if not isinstance(value, Measure) and not is_number(value):
        raise InvalidValueError(f"{name} must be a number or a Measure, got {value!r}")


def _is_color(value: Any) -> bool:
    if value is None or isinstance(value, str):
        return True
    return isinstance(value, tuple) and all(is_number(c) for c in value)


class Positionable(ABC):
    """Base class for everything that has a position.

    A position is split into two parts per axis:

    - a measure-relative offset, multiplied by the current measure value
    - a pixel offset, added verbatim

    so that ``x = margin_measure_x * measure.value + margin_x``. The absolute
    coordinates are recomputed on every read and always follow the measure.
    Offsets are only changed through move(), which is additive.
    """

    def __init__(
        self,
        measure: Measure | None = None,
        margin_measure_x: float = 0,
        margin_measure_y: float = 0,
        margin_x: float = 0,
        margin_y: float = 0,
        name: str | None = None,
    ) -> None:
        if measure is None:
            measure = Measure(1)
        elif not isinstance(measure, Measure):
            raise InvalidValueError(f"measure must be a Measure, got {measure!r}")
        _require_number("margin_measure_x", margin_measure_x)
        _require_number("margin_measure_y", margin_measure_y)
        _require_number("margin_x", margin_x)
        _require_number("margin_y", margin_y)

        self.id = next(_ids)
        self.name = name or f"{type(self).__name__.lower()}_{self.id}"
        self._measure = measure
        self._margin_measure_x = margin_measure_x
        self._margin_measure_y = margin_measure_y
        self._margin_x = margin_x
        self._margin_y = margin_y
        self.insertion_order = next(_insertions)

    @property
    def measure(self) -> Measure:
        """The scale the measure-relative offsets are expressed in."""
        return self._measure

    @measure.setter
    def measure(self, measure: Measure) -> None:
        if not isinstance(measure, Measure):
            logger.warning("%s: measure must be a Measure, got %r", self.name, measure)
            return
        self._measure = measure

    @property
    def margin_measure_x(self) -> float:
        return self._margin_measure_x

    @property
    def margin_measure_y(self) -> float:
        return self._margin_measure_y

    @property
    def margin_x(self) -> float:
        return self._margin_x

    @property
    def margin_y(self) -> float:
        return self._margin_y

    @property
    def x(self) -> float:
        """Absolute X coordinate in pixels."""
        return self._margin_measure_x * self._measure.value + self._margin_x

    @property
    def y(self) -> float:
        """Absolute Y coordinate in pixels."""
        return self._margin_measure_y * self._measure.value + self._margin_y

    def move(
        self,
        d_measure_x: float = 0,
        d_measure_y: float = 0,
        d_x: float = 0,
        d_y: float = 0,
    ) -> InvalidValueError | None:
        """Translate by the given deltas.

        Args:
            d_measure_x: Delta added to the measure-relative X offset
            d_measure_y: Delta added to the measure-relative Y offset
            d_x: Delta added to the pixel X offset
            d_y: Delta added to the pixel Y offset

        Returns:
            None, or an InvalidValueError if a delta was not numeric (nothing
            is moved in that case).
        """
        for label, delta in (
            ("d_measure_x", d_measure_x),
            ("d_measure_y", d_measure_y),
            ("d_x", d_x),
            ("d_y", d_y),
        ):
            if not is_number(delta):
                error = InvalidValueError(f"{label} must be a number, got {delta!r}")
                logger.warning("%s: %s", self.name, error)
                return error

        self._margin_measure_x += d_measure_x
        self._margin_measure_y += d_measure_y
        self._margin_x += d_x
        self._margin_y += d_y
        return None

    def mark_inserted(self) -> None:
        """Stamp the node as the most recently inserted one."""
        self.insertion_order = next(_insertions)

    def iter_nodes(self, include_self: bool = True) -> Iterator[Positionable]:
        """Iterate over this node and its descendants (depth-first)."""
        if include_self:
            yield self

    @abstractmethod
    def paint(self, surface: DrawingSurface) -> None:
        """Paint this node on a drawing surface."""

    @abstractmethod
    def hit_test(self, px: float, py: float) -> bool:
        """Return True if the point lies on this node."""


class Entity(Positionable):
    """A dimensionless point.

    Entities have nothing to paint; they serve as anchors that other nodes
    can be aligned against.
    """

    def paint(self, surface: DrawingSurface) -> None:
        pass

    def hit_test(self, px: float, py: float) -> bool:
        return px == self.x and py == self.y

    def __repr__(self) -> str:
        return f"Entity({self.name!r}, x={self.x}, y={self.y})"


class ShapeNode(Positionable):
    """A positionable node with a size and visual attributes.

    Width and height may be plain numbers or Measures; a Measure size follows
    its current value. A shape placed in a container keeps a weak reference
    to it in ``owner``.
    """

    def __init__(
        self,
        measure: Measure | None = None,
        margin_measure_x: float = 0,
        margin_measure_y: float = 0,
        margin_x: float = 0,
        margin_y: float = 0,
        width: Size = 0,
        height: Size = 0,
        background: Color = "transparent",
        fill: bool = True,
        hidden: bool = False,
        line_width: float = 1,
        z_index: float = 1,
        name: str | None = None,
    ) -> None:
        super().__init__(measure, margin_measure_x, margin_measure_y, margin_x, margin_y, name)
        _require_size("width", width)
        _require_size("height", height)
        _require_number("line_width", line_width)
        _require_number("z_index", z_index)
        if not _is_color(background):
            raise InvalidValueError(
                f"background must be a colour name or tuple, got {background!r}"
            )

        self._width = width
        self._height = height
        self._background = background
        self._fill = bool(fill)
        self._hidden = bool(hidden)
        self._line_width = line_width
        self._z_index = z_index
        self._owner: weakref.ref[ContainerNode] | None = None

    @property
    def width(self) -> float:
        return resolve(self._width)

    @width.setter
    def width(self, width: Size) -> None:
        if not isinstance(width, Measure) and not is_number(width):
            logger.warning("%s: width must be a number or a Measure, got %r", self.name, width)
            return
        self._width = width

    @property
    def height(self) -> float:
        return resolve(self._height)

    @height.setter
    def height(self, height: Size) -> None:
        if not isinstance(height, Measure) and not is_number(height):
            logger.warning("%s: height must be a number or a Measure, got %r", self.name, height)
            return
        self._height = height

    @property
    def background(self) -> Color:
        return self._background

    @background.setter
    def background(self, background: Color) -> None:
        if not _is_color(background):
            logger.warning(
                "%s: background must be a colour name or tuple, got %r", self.name, background
            )
            return
        self._background = background

    @property
    def fill(self) -> bool:
        return self._fill

    @fill.setter
    def fill(self, fill: bool) -> None:
        if not isinstance(fill, bool):
            logger.warning("%s: fill must be a bool, got %r", self.name, fill)
            return
        self._fill = fill

    @property
    def hidden(self) -> bool:
        return self._hidden

    @hidden.setter
    def hidden(self, hidden: bool) -> None:
        if not isinstance(hidden, bool):
            logger.warning("%s: hidden must be a bool, got %r", self.name, hidden)
            return
        self._hidden = hidden

    @property
    def line_width(self) -> float:
        return self._line_width

    @line_width.setter
    def line_width(self, line_width: float) -> None:
        if not is_number(line_width):
            logger.warning("%s: line width must be a number, got %r", self.name, line_width)
            return
        self._line_width = line_width

    @property
    def z_index(self) -> float:
        """Stacking order for pointer dispatch (higher is on top)."""
        return self._z_index

    @z_index.setter
    def z_index(self, z_index: float) -> None:
        if not is_number(z_index):
            logger.warning("%s: z-index must be a number, got %r", self.name, z_index)
            return
        self._z_index = z_index

    @property
    def owner(self) -> ContainerNode | None:
        """The container this shape belongs to, if any."""
        if self._owner is None:
            return None
        return self._owner()

    @owner.setter
    def owner(self, container: ContainerNode | None) -> None:
        self._owner = None if container is None else weakref.ref(container)

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(left, top, right, bottom) in pixels."""
        return self.left, self.top, self.right, self.bottom

    def depends_on(self, measure: Measure) -> ShapeNode:
        """Re-layout this shape's container whenever ``measure`` changes."""
        measure.add_dependent(self)
        return self

    def align(self, direction, container):
        """Align this shape against a container. See core.align."""
        from .align import align

        return align(direction, self, container)

    def hit_test(self, px: float, py: float) -> bool:
        """Inclusive bounding box test."""
        return self.left <= px <= self.right and self.top <= py <= self.bottom

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.name!r}, x={self.x}, y={self.y}, "
            f"w={self.width}, h={self.height})"
        )
