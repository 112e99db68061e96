"""Text metrics providers."""

from __future__ import annotations

from functools import lru_cache
from typing import Protocol, runtime_checkable

from PIL import ImageFont

# TrueType files tried for generic CSS families, regular and bold.
FONT_FILES: dict[str, tuple[str, str]] = {
    "sans-serif": ("DejaVuSans.ttf", "DejaVuSans-Bold.ttf"),
    "serif": ("DejaVuSerif.ttf", "DejaVuSerif-Bold.ttf"),
    "monospace": ("DejaVuSansMono.ttf", "DejaVuSansMono-Bold.ttf"),
}


@runtime_checkable
class TextMetrics(Protocol):
    """Protocol for services reporting the rendered width of text."""

    def measure(self, text: str, font_size: float, font_weight: str, font_family: str) -> float:
        """Return the width in pixels of ``text`` rendered with the given font."""
        ...


def _is_bold(weight: str) -> bool:
    weight = str(weight).lower()
    return weight in ("bold", "bolder") or (weight.isdigit() and int(weight) >= 600)


@lru_cache(maxsize=64)
def load_font(size: float, weight: str = "normal", family: str = "sans-serif"):
    """Load a PIL font for the given description.

    Generic family names map to DejaVu files, any other family is tried as a
    font file name. Pillow's built-in font is used when no file is found.
    """
    regular, bold = FONT_FILES.get(family, (family, family))
    candidates = [bold, regular] if _is_bold(weight) else [regular]
    pixel_size = max(1, round(size))
    for filename in candidates:
        try:
            return ImageFont.truetype(filename, pixel_size)
        except OSError:
            continue
    return ImageFont.load_default(size=pixel_size)


class PillowTextMetrics:
    """Measures text with the fonts PillowSurface draws with."""

    def measure(self, text: str, font_size: float, font_weight: str, font_family: str) -> float:
        if not text:
            return 0.0
        return float(load_font(font_size, font_weight, font_family).getlength(text))


class EstimatedTextMetrics:
    """Estimates text width as ``len(text) * font_size * advance``.

    Deterministic and font independent, useful when no renderer is around.
    """

    def __init__(self, advance: float = 0.6) -> None:
        self.advance = advance

    def measure(self, text: str, font_size: float, font_weight: str, font_family: str) -> float:
        return len(text) * font_size * self.advance
