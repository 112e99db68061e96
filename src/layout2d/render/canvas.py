"""Canvas: a drawing surface with ordered paint layers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from .surface import DrawingSurface

if TYPE_CHECKING:
    from ..core.node import Positionable

LAYERS = ("back", "main", "front")


class Canvas:
    """Holds the nodes painted on a surface, in three layers.

    Layers paint back to front and, inside a layer, in insertion order, so
    later nodes cover earlier ones. The canvas is itself a valid alignment
    target with its origin at (0, 0) and the surface's pixel size.

    Example:
        canvas = Canvas(PillowSurface(800, 600))
        panel = canvas.add(ContainerNode(width=200, height=100))
        panel.align("centerX", canvas)
        canvas.refresh()
    """

    def __init__(self, surface: DrawingSurface) -> None:
        self.surface = surface
        self.back_layer: list[Positionable] = []
        self.main_layer: list[Positionable] = []
        self.front_layer: list[Positionable] = []

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height

    def layer(self, name: str) -> list[Positionable]:
        """Return the node list of a layer by name."""
        if name not in LAYERS:
            raise ValueError(f"Unknown layer '{name}', expected one of {LAYERS}")
        return getattr(self, f"{name}_layer")

    def add(self, node: Positionable, layer: str = "main") -> Positionable:
        """Append a node to a layer.

        Returns:
            The added node (for chaining)
        """
        self.layer(layer).append(node)
        node.mark_inserted()
        return node

    def layers(self) -> Iterator[list[Positionable]]:
        yield self.back_layer
        yield self.main_layer
        yield self.front_layer

    def iter_nodes(self) -> Iterator[Positionable]:
        """Iterate over every node in paint order, descending into containers."""
        for nodes in self.layers():
            for node in nodes:
                yield from node.iter_nodes()

    def find(self, name: str) -> Positionable | None:
        for node in self.iter_nodes():
            if node.name == name:
                return node
        return None

    def refresh(self) -> None:
        """Clear the surface and repaint every layer."""
        self.clear()
        for nodes in self.layers():
            for node in nodes:
                node.paint(self.surface)

    def clear(self) -> None:
        self.surface.clear()

