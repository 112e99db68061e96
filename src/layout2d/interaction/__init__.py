"""Pointer input dispatch."""

from .dispatch import PointerDispatcher

__all__ = ["PointerDispatcher"]
