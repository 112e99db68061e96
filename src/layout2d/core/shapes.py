"""Concrete shape nodes: rectangles, images and text."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image

from ..errors import InvalidValueError
from ..render.metrics import PillowTextMetrics, TextMetrics
from ..render.surface import Font
from .measure import Measure, is_number, resolve
from .node import Color, Positionable, ShapeNode, Size, _require_number, _require_size

if TYPE_CHECKING:
    from ..render.surface import DrawingSurface

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 16
DEFAULT_FONT_WEIGHT = "normal"
DEFAULT_FONT_FAMILY = "sans-serif"

# Extra pixels added below the text box whenever the font size changes.
TEXT_PAD = 2


class Rectangle(ShapeNode):
    """A filled or outlined rectangle with optional rounded corners."""

    def __init__(
        self,
        measure: Measure | None = None,
        margin_measure_x: float = 0,
        margin_measure_y: float = 0,
        margin_x: float = 0,
        margin_y: float = 0,
        width: Size = 0,
        height: Size = 0,
        background: Color = "transparent",
        radius: float = 0,
        **kwargs,
    ) -> None:
        super().__init__(
            measure, margin_measure_x, margin_measure_y, margin_x, margin_y,
            width, height, background, **kwargs,
        )
        _require_number("radius", radius)
        self.radius = radius

    def paint(self, surface: DrawingSurface) -> None:
        if self.hidden:
            return
        if self.fill:
            surface.fill_rect(
                self.x, self.y, self.width, self.height, self.background, radius=self.radius
            )
        else:
            surface.stroke_rect(
                self.x, self.y, self.width, self.height, self.background,
                line_width=self.line_width, radius=self.radius,
            )


class ImageNode(ShapeNode):
    """A bitmap drawn into its bounding box.

    The source may be a path or an already loaded PIL image. Paths are opened
    on first use. When no size is given, the image's own size is used.
    """

    def __init__(
        self,
        source: str | Path | Image.Image,
        measure: Measure | None = None,
        margin_measure_x: float = 0,
        margin_measure_y: float = 0,
        margin_x: float = 0,
        margin_y: float = 0,
        width: Size | None = None,
        height: Size | None = None,
        **kwargs,
    ) -> None:
        if isinstance(source, Image.Image):
            self._image: Image.Image | None = source
            self.source: Path | None = None
        else:
            self._image = None
            self.source = Path(source)

        if width is None or height is None:
            natural_width, natural_height = self.image.size
            width = natural_width if width is None else width
            height = natural_height if height is None else height

        super().__init__(
            measure, margin_measure_x, margin_measure_y, margin_x, margin_y,
            width, height, **kwargs,
        )

    @property
    def image(self) -> Image.Image:
        if self._image is None:
            self._image = Image.open(self.source)
        return self._image

    def paint(self, surface: DrawingSurface) -> None:
        if self.hidden:
            return
        surface.draw_image(self.image, self.x, self.y, self.width, self.height)


class TextNode(ShapeNode):
    """A block of text.

    The node's (x, y) is the text baseline, not the top of its box. Width is
    either fixed or measured from the rendered text; height is the number of
    lines times the font size. When the font size changes, the pixel Y offset
    is corrected by the change in height (plus TEXT_PAD) so the top of the
    text stays where it was and the box grows downward.

    The text owns a background rectangle that follows every move.
    """

    def __init__(
        self,
        measure: Measure | None = None,
        margin_measure_x: float = 0,
        margin_measure_y: float = 0,
        margin_x: float = 0,
        margin_y: float = 0,
        max_width: Size | None = None,
        text: str = "",
        color: Color = "black",
        background: Color = "transparent",
        font_size: float = DEFAULT_FONT_SIZE,
        font_weight: str = DEFAULT_FONT_WEIGHT,
        font_family: str = DEFAULT_FONT_FAMILY,
        metrics: TextMetrics | None = None,
        **kwargs,
    ) -> None:
        if max_width is not None:
            _require_size("max_width", max_width)
        _require_number("font_size", font_size)
        if not isinstance(text, str):
            raise InvalidValueError(f"text must be a string, got {text!r}")

        super().__init__(
            measure, margin_measure_x, margin_measure_y, margin_x, margin_y,
            background=background, **kwargs,
        )
        self._fixed_width = max_width
        self.text = text
        self.color = color
        self.font_weight = font_weight
        self.font_family = font_family
        self.metrics = metrics or PillowTextMetrics()
        self._font_size = 0

        self.bg = Rectangle(
            self.measure, margin_measure_x, margin_measure_y, margin_x, margin_y,
            background=background, name=f"{self.name}_bg",
        )
        self._correct_baseline(0, font_size)
        self._font_size = font_size
        self._sync_background()

    @property
    def measure(self) -> Measure:
        return self._measure

    @measure.setter
    def measure(self, measure: Measure) -> None:
        Positionable.measure.fset(self, measure)
        self.bg.measure = self._measure

    @property
    def font(self) -> Font:
        return Font(self._font_size, self.font_weight, self.font_family)

    @property
    def font_size(self) -> float:
        return self._font_size

    @font_size.setter
    def font_size(self, font_size: float) -> None:
        if not is_number(font_size):
            logger.warning("%s: font size must be a number, got %r", self.name, font_size)
            return
        self._correct_baseline(self._font_size, font_size)
        self._font_size = font_size
        self._sync_background()

    @property
    def width(self) -> float:
        if self._fixed_width:
            return resolve(self._fixed_width)
        return self.measure_text()

    @width.setter
    def width(self, width: Size | None) -> None:
        if width is not None and not isinstance(width, Measure) and not is_number(width):
            logger.warning("%s: width must be a number or a Measure, got %r", self.name, width)
            return
        self._fixed_width = width
        self._sync_background()

    @property
    def height(self) -> float:
        return self.line_count() * self._font_size

    @height.setter
    def height(self, height: Size) -> None:
        logger.warning("%s: text height is derived from its lines and cannot be set", self.name)

    def measure_text(self, font_size: float | None = None) -> float:
        """Rendered width of the text at the given (or current) font size."""
        size = self._font_size if font_size is None else font_size
        if not self.text or size <= 0:
            return 0.0
        return self.metrics.measure(self.text, size, self.font_weight, self.font_family)

    def line_count(self, font_size: float | None = None) -> int:
        """Number of lines the text wraps into at the given (or current) size."""
        measured = self.measure_text(font_size)
        if measured <= 0:
            return 0
        width = resolve(self._fixed_width) if self._fixed_width else measured
        if width <= 0:
            return 1
        return math.ceil(measured / width)

    def _correct_baseline(self, current_size: float, new_size: float) -> None:
        current_lines = self.line_count(current_size)
        new_lines = self.line_count(new_size)
        correction = new_lines * new_size - current_lines * current_size
        self._margin_y += correction + TEXT_PAD

    def _sync_background(self) -> None:
        self.bg.background = self.background
        self.bg.width = self.width
        self.bg.height = self.height

    def move(
        self,
        d_measure_x: float = 0,
        d_measure_y: float = 0,
        d_x: float = 0,
        d_y: float = 0,
    ) -> InvalidValueError | None:
        error = super().move(d_measure_x, d_measure_y, d_x, d_y)
        if error is None:
            self.bg.move(d_measure_x, d_measure_y, d_x, d_y)
        return error

    def paint(self, surface: DrawingSurface) -> None:
        if self.hidden:
            return
        self._sync_background()
        self.bg.paint(surface)
        surface.draw_text(self.text, self.x, self.y, self.font, self.color)
