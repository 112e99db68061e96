"""Routing of host pointer events to interactive nodes."""

from __future__ import annotations

import logging

from ..core.container import InteractiveNode, PointerEvent
from ..errors import InvalidValueError
from ..render.canvas import Canvas

logger = logging.getLogger(__name__)

# Event kind -> callback attribute on InteractiveNode
CALLBACKS = {
    "click": "on_click",
    "down": "on_pointer_down",
    "up": "on_pointer_up",
}


class PointerDispatcher:
    """Delivers pointer events to the topmost interactive node under a point.

    Candidates are every visible InteractiveNode on the canvas, in any layer
    and at any nesting depth, whose hit test succeeds. The topmost is the one
    with the highest ``z_index``; on a tie the most recently inserted wins.
    Only the topmost node's callback runs.

    ``move`` events track hovering: when the topmost node under the pointer
    changes, the previous one gets ``on_pointer_leave`` and the new one
    ``on_pointer_enter``.
    """

    def __init__(self, canvas: Canvas) -> None:
        self.canvas = canvas
        self.hovered: InteractiveNode | None = None

    def hits(self, px: float, py: float) -> list[InteractiveNode]:
        """Interactive nodes under the point, topmost first."""
        nodes = [
            node for node in self.canvas.iter_nodes()
            if isinstance(node, InteractiveNode) and _visible(node) and node.hit_test(px, py)
        ]
        return sorted(nodes, key=lambda node: (-node.z_index, -node.insertion_order))

    def topmost(self, px: float, py: float) -> InteractiveNode | None:
        found = self.hits(px, py)
        return found[0] if found else None

    def dispatch(self, kind: str, px: float, py: float) -> InteractiveNode | InvalidValueError | None:
        """Deliver a pointer event.

        Args:
            kind: One of ``click``, ``down``, ``up`` or ``move``
            px: Pointer X in surface pixels
            py: Pointer Y in surface pixels

        Returns:
            The node that received the event, None if no node was hit, or
            an InvalidValueError for an unknown event kind.
        """
        if kind != "move" and kind not in CALLBACKS:
            error = InvalidValueError(f"Unknown pointer event kind: {kind!r}")
            logger.warning("%s", error)
            return error

        event = PointerEvent(kind, px, py)
        target = self.topmost(px, py)

        if kind == "move":
            if target is not self.hovered:
                if self.hovered is not None:
                    self.hovered.on_pointer_leave(event)
                if target is not None:
                    target.on_pointer_enter(event)
                self.hovered = target
            return target

        if target is not None:
            logger.debug("Dispatching %s at (%s, %s) to %s", kind, px, py, target.name)
            getattr(target, CALLBACKS[kind])(event)
        return target


def _visible(node: InteractiveNode) -> bool:
    """False if the node is hidden or a container above it does not paint its children."""
    if node.hidden:
        return False
    owner = node.owner
    while owner is not None:
        if owner.hidden or owner.show_bounds_only:
            return False
        owner = owner.owner
    return True
