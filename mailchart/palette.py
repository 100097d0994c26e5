from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from mailchart.raster.canvas import RGBA
from mailchart.style import parse_hex_color


@dataclass(frozen=True)
class Palette:
    """Ordered series colour table; series ``i`` uses entry ``i mod len``."""

    colors: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("palette must contain at least one color")
        for color in self.colors:
            parse_hex_color(color)

    def __len__(self) -> int:
        return len(self.colors)

    def color_for(self, index: int) -> str:
        if index < 0:
            raise ValueError("series index must be >= 0")
        return self.colors[index % len(self.colors)]

    def rgba_for(self, index: int) -> RGBA:
        return parse_hex_color(self.color_for(index))

    @classmethod
    def from_colors(cls, colors: Sequence[str]) -> "Palette":
        return cls(colors=tuple(colors))


DEFAULT_PALETTE = Palette(
    colors=(
        "#33B2DF",
        "#D4526E",
        "#13D8AA",
        "#F9A3A4",
        "#A5978B",
        "#2B908F",
        "#F48024",
        "#90EE7E",
        "#69D2E7",
        "#546E7A",
    )
)
