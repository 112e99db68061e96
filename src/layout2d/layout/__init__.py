"""Data-driven layout documents."""

from .loader import Layout, LayoutLoader

__all__ = ["Layout", "LayoutLoader"]
