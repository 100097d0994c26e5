from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from mailchart.raster.canvas import RGBA, TRANSPARENT, fill_rect, new_canvas
from mailchart.raster.draw_lines import ClipRect, Point, draw_line, draw_polyline
from mailchart.raster.draw_markers import fill_ellipse
from mailchart.raster.draw_text import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX, draw_text


class Surface(Protocol):
    """Drawing primitives the chart composer needs, in output-pixel coordinates."""

    def fill_rect(self, x: int, y: int, width: int, height: int, color: RGBA) -> None: ...

    def draw_line(self, start: Point, end: Point, color: RGBA, width: int = 1) -> None: ...

    def draw_polyline(
        self,
        points: Sequence[Point],
        color: RGBA,
        width: int = 1,
        clip: ClipRect | None = None,
    ) -> None: ...

    def draw_text(self, x: int, y: int, text: str, color: RGBA) -> None: ...

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float, color: RGBA) -> None: ...


class RasterSurface:
    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: RGBA = TRANSPARENT,
        font_family: str = DEFAULT_FONT_FAMILY,
        font_size_px: float = DEFAULT_FONT_SIZE_PX,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.font_family = font_family
        self.font_size_px = font_size_px
        self.pixels = new_canvas(self.width, self.height, color=background)

    def fill_rect(self, x: int, y: int, width: int, height: int, color: RGBA) -> None:
        fill_rect(self.pixels, x, y, width, height, color)

    def draw_line(self, start: Point, end: Point, color: RGBA, width: int = 1) -> None:
        draw_line(self.pixels, start, end, color, width=width)

    def draw_polyline(
        self,
        points: Sequence[Point],
        color: RGBA,
        width: int = 1,
        clip: ClipRect | None = None,
    ) -> None:
        draw_polyline(self.pixels, points, color, width=width, clip=clip)

    def draw_text(self, x: int, y: int, text: str, color: RGBA) -> None:
        draw_text(
            self.pixels,
            x,
            y,
            text,
            color,
            font_family=self.font_family,
            font_size_px=self.font_size_px,
        )

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float, color: RGBA) -> None:
        fill_ellipse(self.pixels, cx, cy, rx, ry, color)
