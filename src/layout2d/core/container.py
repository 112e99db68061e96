"""Container nodes: groups of shapes positioned and moved as a unit."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Iterator

from ..errors import InvalidValueError
from .align import AlignX, AlignY, align_x, align_y, parse_align_x, parse_align_y
from .measure import Measure
from .node import Positionable, ShapeNode, Size
from .shapes import Rectangle

if TYPE_CHECKING:
    from ..render.surface import DrawingSurface

logger = logging.getLogger(__name__)


class ContainerNode(Rectangle):
    """A rectangle that owns an ordered list of child shapes.

    Children are placed relative to the container when inserted, move
    rigidly with it, and paint in list order (later children on top). If an
    alignment directive is set for an axis, every child is aligned on that
    axis when inserted and again whenever relayout_children() runs, which is
    what a Measure triggers for its dependents' containers.

    Children cannot be removed once inserted, and a shape belongs to at most
    one container.

    Example:
        unit = Measure(10)
        menu = ContainerNode(unit, width=200, height=120, align_x="center")
        title = Rectangle(unit, width=80, height=20).depends_on(unit)
        menu.insert_children([title])
        unit.value = 12  # menu re-centers title
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
        children: Iterable[ShapeNode] | None = None,
        align_x: AlignX | str | None = None,
        align_y: AlignY | str | None = None,
        background="pink",
        fill: bool = False,
        show_bounds_only: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(
            measure, margin_measure_x, margin_measure_y, margin_x, margin_y,
            width, height, background, fill=fill, **kwargs,
        )
        self.align_x = None if align_x is None else parse_align_x(align_x)
        self.align_y = None if align_y is None else parse_align_y(align_y)
        self.show_bounds_only = bool(show_bounds_only)
        self.children: list[ShapeNode] = []
        if children:
            self.insert_children(children)

    def insert_children(
        self,
        children: Iterable[ShapeNode],
        reverse: bool = False,
        prepend: bool = False,
    ) -> list[ShapeNode]:
        """Insert shapes into this container.

        Each child is attached, translated by the container's offsets so that
        its own offsets become relative to the container, aligned once on
        every axis that has a directive, then appended (or put at the front
        when ``prepend`` is set).

        Args:
            children: Shapes to insert
            reverse: Process the shapes in reverse order. Combined with
                prepend, this keeps their visual order when splicing in front.
            prepend: Insert each shape at the front of the child list

        Returns:
            The shapes that were inserted. Shapes that already belong to a
            container are skipped with a warning.
        """
        batch = list(children)
        if reverse:
            batch.reverse()

        inserted = []
        for child in batch:
            if child is self or child.owner is not None:
                error = InvalidValueError(
                    f"{child.name} already belongs to a container and cannot be "
                    f"inserted into {self.name}"
                )
                logger.warning("%s", error)
                continue

            child.owner = self
            self._place(child)
            if prepend:
                self.children.insert(0, child)
            else:
                self.children.append(child)
            child.mark_inserted()
            inserted.append(child)
        return inserted

    def _place(self, child: ShapeNode) -> None:
        # Offsets in a shared measure stay measure-relative; otherwise the
        # container's current pixel position is used.
        if child.measure is self.measure:
            child.move(self.margin_measure_x, self.margin_measure_y, self.margin_x, self.margin_y)
        else:
            child.move(0, 0, self.x, self.y)
        self._align(child)

    def _align(self, child: ShapeNode) -> None:
        if self.align_x is not None:
            align_x(self.align_x, child, self)
        if self.align_y is not None:
            align_y(self.align_y, child, self)

    def relayout_children(self) -> None:
        """Re-apply the alignment directives to every child.

        Children are aligned against the container's current bounds. Without
        directives this does nothing, and children positioned only by move()
        keep their offsets.
        """
        if self.align_x is None and self.align_y is None:
            return
        for child in self.children:
            self._align(child)

    def move(
        self,
        d_measure_x: float = 0,
        d_measure_y: float = 0,
        d_x: float = 0,
        d_y: float = 0,
    ) -> InvalidValueError | None:
        """Translate the container and all its children by the same delta."""
        error = super().move(d_measure_x, d_measure_y, d_x, d_y)
        if error is not None:
            return error
        for child in self.children:
            child.move(d_measure_x, d_measure_y, d_x, d_y)
        return None

    def paint(self, surface: DrawingSurface) -> None:
        if self.hidden:
            return
        if self.show_bounds_only:
            super().paint(surface)
            return
        if self.fill:
            super().paint(surface)
        for child in self.children:
            child.paint(surface)

    def iter_nodes(self, include_self: bool = True) -> Iterator[Positionable]:
        if include_self:
            yield self
        for child in self.children:
            yield from child.iter_nodes(include_self=True)

    def find(self, name: str) -> Positionable | None:
        """Find a descendant node by name."""
        for node in self.iter_nodes():
            if node.name == name:
                return node
        return None

    def find_all(self, name: str) -> list[Positionable]:
        return [node for node in self.iter_nodes() if node.name == name]

    @property
    def depth(self) -> int:
        """Nesting depth of this container (top level = 0)."""
        owner = self.owner
        return 0 if owner is None else owner.depth + 1

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.name!r}, x={self.x}, y={self.y}, "
            f"w={self.width}, h={self.height}, children={len(self.children)})"
        )


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event in surface-local pixel coordinates."""

    kind: str
    x: float
    y: float


PointerCallback = Callable[[PointerEvent], None]


def _ignore(event: PointerEvent) -> None:
    pass


class InteractiveNode(ContainerNode):
    """A container that reacts to pointer input.

    The callbacks are plain attributes and can be replaced freely. When
    interactive nodes overlap, the one with the highest ``z_index`` receives
    the event (see interaction.dispatch).
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.on_click: PointerCallback = _ignore
        self.on_pointer_down: PointerCallback = _ignore
        self.on_pointer_up: PointerCallback = _ignore
        self.on_pointer_enter: PointerCallback = _ignore
        self.on_pointer_leave: PointerCallback = _ignore
