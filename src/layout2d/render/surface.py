"""Drawing surfaces: the boundary between the layout engine and pixels."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw

from .metrics import load_font

TRANSPARENT = "transparent"


@dataclass(frozen=True)
class Font:
    """Font description used by text nodes."""

    size: float
    weight: str = "normal"
    family: str = "sans-serif"

    @property
    def css(self) -> str:
        """The font as a CSS shorthand string, e.g. ``bold 16px serif``."""
        return f"{self.weight} {self.size:g}px {self.family}"


@runtime_checkable
class DrawingSurface(Protocol):
    """Protocol for anything nodes can paint on.

    Nodes issue exactly one of these calls per paint.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def clear(self) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color, radius: float = 0) -> None: ...

    def stroke_rect(
        self, x: float, y: float, w: float, h: float, color,
        line_width: float = 1, radius: float = 0,
    ) -> None: ...

    def draw_image(self, image: Image.Image, x: float, y: float, w: float, h: float) -> None: ...

    def draw_text(self, text: str, x: float, y: float, font: Font, color) -> None: ...


class PillowSurface:
    """A drawing surface backed by an RGBA PIL image."""

    def __init__(self, width: int, height: int, background=(0, 0, 0, 0)) -> None:
        self.background = background
        self.image = Image.new("RGBA", (int(width), int(height)), self._color(background))
        self._draw = ImageDraw.Draw(self.image)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def clear(self) -> None:
        """Reset every pixel to the background colour."""
        self._draw.rectangle(
            (0, 0, self.width, self.height), fill=self._color(self.background)
        )

    def fill_rect(self, x, y, w, h, color, radius=0) -> None:
        if self._is_transparent(color) or w <= 0 or h <= 0:
            return
        self._draw.rounded_rectangle(self._box(x, y, w, h), radius=radius, fill=color)

    def stroke_rect(self, x, y, w, h, color, line_width=1, radius=0) -> None:
        if self._is_transparent(color) or w <= 0 or h <= 0:
            return
        self._draw.rounded_rectangle(
            self._box(x, y, w, h), radius=radius, outline=color, width=max(1, round(line_width))
        )

    def draw_image(self, image: Image.Image, x, y, w, h) -> None:
        size = (round(w), round(h))
        if size[0] <= 0 or size[1] <= 0:
            return
        tile = image.convert("RGBA")
        if tile.size != size:
            tile = tile.resize(size)
        # paste() clips negative offsets, alpha_composite() rejects them
        self.image.paste(tile, (round(x), round(y)), tile)

    def draw_text(self, text: str, x, y, font: Font, color) -> None:
        """Draw text with its bottom edge on ``y``."""
        if not text:
            return
        pil_font = load_font(font.size, font.weight, font.family)
        bottom = pil_font.getbbox(text)[3]
        self._draw.text((x, y - bottom), text, font=pil_font, fill=color)

    def to_array(self) -> NDArray[np.uint8]:
        """Return the pixels as an HxWx4 uint8 array."""
        return np.array(self.image)

    def save(self, path: str | Path) -> None:
        self.image.save(str(path))

    @staticmethod
    def _is_transparent(color) -> bool:
        return color is None or color == TRANSPARENT

    @staticmethod
    def _color(color):
        return (0, 0, 0, 0) if PillowSurface._is_transparent(color) else color

    @staticmethod
    def _box(x, y, w, h) -> tuple[float, float, float, float]:
        return (x, y, x + w - 1, y + h - 1)
