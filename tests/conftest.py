"""Shared fixtures for layout2d tests."""

import pytest

from layout2d import EstimatedTextMetrics


class RecordingSurface:
    """A drawing surface that records paint calls instead of drawing."""

    def __init__(self, width: int = 640, height: int = 480) -> None:
        self.width = width
        self.height = height
        self.calls: list[tuple] = []

    def clear(self) -> None:
        self.calls.append(("clear",))

    def fill_rect(self, x, y, w, h, color, radius=0) -> None:
        self.calls.append(("fill_rect", x, y, w, h, color))

    def stroke_rect(self, x, y, w, h, color, line_width=1, radius=0) -> None:
        self.calls.append(("stroke_rect", x, y, w, h, color))

    def draw_image(self, image, x, y, w, h) -> None:
        self.calls.append(("draw_image", x, y, w, h))

    def draw_text(self, text, x, y, font, color) -> None:
        self.calls.append(("draw_text", text, x, y, font.size, color))

    @property
    def kinds(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def metrics():
    """Deterministic metrics: every character is half the font size wide."""
    return EstimatedTextMetrics(advance=0.5)
