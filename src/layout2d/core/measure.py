"""Measure: a shared reactive scale factor."""

from __future__ import annotations

import logging
import numbers
import weakref
from typing import TYPE_CHECKING, Callable

from ..errors import InvalidValueError

if TYPE_CHECKING:
    from .node import ShapeNode

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[float, float], None]


def is_number(value: object) -> bool:
    """Return True for real numbers, excluding bools."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class Measure:
    """A mutable scalar shared by reference between nodes.

    Node coordinates are expressed partly as multiples of a measure's value,
    so changing the value moves every node that uses it. Two kinds of
    listeners are notified on change:

    - subscribers: plain callables called with ``(old, new)``
    - dependents: nodes whose owning container must re-run its alignment

    Dependents are held weakly so a measure never keeps a node alive.

    Example:
        unit = Measure(1)
        rect = Rectangle(measure=unit, margin_measure_x=2, margin_x=5)
        rect.x  # 7
        unit.value = 10
        rect.x  # 25
    """

    def __init__(self, value: float = 1.0) -> None:
        if not is_number(value):
            raise InvalidValueError(f"Measure value must be a number, got {value!r}")
        self._value = value
        self._subscribers: list[ChangeCallback] = []
        self._dependents: weakref.WeakValueDictionary[int, ShapeNode] = (
            weakref.WeakValueDictionary()
        )

    @classmethod
    def derive_from(cls, base: Measure, fn: Callable[[Measure], float]) -> Measure:
        """Create a measure whose value is ``fn(base)``.

        The derived value is re-evaluated every time ``base`` changes and is
        assigned through set_value(), so the derived measure notifies its own
        subscribers and dependents in turn.

        Args:
            base: The measure to follow
            fn: Function of the base measure returning the derived value

        Returns:
            The derived Measure
        """
        derived = cls(fn(base))
        base.subscribe(lambda old, new: derived.set_value(fn(base)))
        return derived

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        self.set_value(value)

    def set_value(self, value: float) -> InvalidValueError | None:
        """Assign a new value and propagate the change.

        Subscribers run first, in subscription order. Then every distinct
        container owning a dependent node re-lays out its children, once.

        Returns:
            None on success, or the InvalidValueError when the value was
            rejected (the previous value is kept).
        """
        if not is_number(value):
            error = InvalidValueError(f"Measure value must be a number, got {value!r}")
            logger.warning("%s", error)
            return error

        old = self._value
        self._value = value
        for callback in list(self._subscribers):
            callback(old, value)

        for owner in self._dependent_owners():
            owner.relayout_children()
        return None

    def subscribe(self, callback: ChangeCallback) -> None:
        """Register a callback fired with ``(old, new)`` on every change."""
        self._subscribers.append(callback)

    def add_dependent(self, node: ShapeNode) -> None:
        """Register a node whose container re-lays out when this value changes."""
        self._dependents[node.id] = node

    @property
    def dependents(self) -> list[ShapeNode]:
        return list(self._dependents.values())

    def _dependent_owners(self) -> list:
        owners = {}
        for node in list(self._dependents.values()):
            owner = node.owner
            if owner is not None and id(owner) not in owners:
                owners[id(owner)] = owner
        return list(owners.values())

    # Numeric protocol: a measure reads as its current value.

    def __float__(self) -> float:
        return float(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __add__(self, other):
        return self._value + _unwrap(other)

    __radd__ = __add__

    def __sub__(self, other):
        return self._value - _unwrap(other)

    def __rsub__(self, other):
        return _unwrap(other) - self._value

    def __mul__(self, other):
        return self._value * _unwrap(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        return self._value / _unwrap(other)

    def __rtruediv__(self, other):
        return _unwrap(other) / self._value

    def __neg__(self):
        return -self._value

    def __repr__(self) -> str:
        return f"Measure({self._value!r})"


def _unwrap(value):
    return value.value if isinstance(value, Measure) else value


def resolve(value: float | Measure) -> float:
    """Return the current numeric value of a number or a Measure."""
    return value.value if isinstance(value, Measure) else value
