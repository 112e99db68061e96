"""Error types for the layout engine.

Constructors raise these to fail fast on bad input. Setters and operations on
live nodes return them instead, after logging a warning, so a bad value never
interrupts a layout pass.
"""


class LayoutError(Exception):
    """Base class for layout errors."""


class InvalidValueError(LayoutError, ValueError):
    """A value of the wrong semantic type was given (e.g. a non-numeric offset)."""


class InvalidAlignmentTarget(LayoutError, TypeError):
    """Alignment was requested against an object that is not a container."""
