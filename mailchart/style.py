from __future__ import annotations

from dataclasses import asdict, dataclass
import re
from typing import Any, Mapping

from PIL import ImageColor

from mailchart.raster.canvas import RGBA

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

_COLOR_TOKENS = ("plot_background", "line_color", "text_color")
_POSITIVE_INT_TOKENS = ("default_width", "default_height", "output_scale", "max_x_ticks", "y_gridlines")
_NON_NEGATIVE_TOKENS = (
    "top_padding_px",
    "right_padding_px",
    "bottom_padding_px",
    "y_label_pad_px",
    "y_label_offset_px",
    "x_label_offset_px",
    "tick_length_px",
    "legend_padding",
    "legend_marker_diameter",
    "legend_vertical_spacing",
    "legend_horizontal_spacing",
    "legend_series_spacing",
    "legend_bottom_buffer_px",
    "gridline_width",
    "series_line_width",
)


@dataclass(frozen=True)
class ChartStyle:
    """Layout and colour tokens for a line chart.

    Fields ending in ``_px`` are absolute output pixels. Legend sizes and stroke
    widths are nominal units multiplied by ``output_scale``.
    """

    default_width: int = 600
    default_height: int = 300
    output_scale: int = 2
    font_family: str = "DejaVu Sans"
    font_size: float = 11.0

    plot_background: str = "#E4E4E4"
    line_color: str = "#B4B4B4"
    text_color: str = "#444444"

    top_padding_px: int = 10
    right_padding_px: int = 20
    bottom_padding_px: int = 40
    y_label_pad_px: int = 10
    y_label_offset_px: int = 10
    x_label_offset_px: int = 10
    tick_length_px: int = 5
    max_x_ticks: int = 10
    y_gridlines: int = 4

    legend_padding: float = 10.0
    legend_marker_diameter: float = 10.0
    legend_vertical_spacing: float = 5.0
    legend_horizontal_spacing: float = 3.0
    legend_series_spacing: float = 10.0
    legend_bottom_buffer_px: int = 5

    gridline_width: float = 1.0
    series_line_width: float = 2.0

    @property
    def font_size_px(self) -> float:
        return self.font_size * self.output_scale

    def rgba(self, token: str) -> RGBA:
        return parse_hex_color(getattr(self, token))


DEFAULT_STYLE = ChartStyle()


def parse_hex_color(value: str) -> RGBA:
    """Parse ``#RRGGBB`` or ``#RRGGBBAA``; anything else is a ``ValueError``."""
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError(f"expected a hex color (#RRGGBB or #RRGGBBAA), got {value!r}")
    rgb = ImageColor.getcolor(value, "RGBA")
    assert isinstance(rgb, tuple)
    r, g, b, a = rgb
    return (int(r), int(g), int(b), int(a))


def validate_chart_style(overrides: Mapping[str, Any] | None = None) -> ChartStyle:
    """Validate and merge style overrides against the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_STYLE)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown style token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        try:
            parse_hex_color(raw[key])
        except ValueError as exc:
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)") from exc

    for key in _POSITIVE_INT_TOKENS:
        if isinstance(raw[key], bool) or not isinstance(raw[key], int) or raw[key] <= 0:
            raise ValueError(f"Token `{key}` must be a positive integer")

    for key in _NON_NEGATIVE_TOKENS:
        if isinstance(raw[key], bool) or not isinstance(raw[key], (int, float)) or raw[key] < 0:
            raise ValueError(f"Token `{key}` must be a non-negative number")

    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise ValueError("Token `font_family` must be a non-empty string")

    if not isinstance(raw["font_size"], (int, float)) or float(raw["font_size"]) <= 0:
        raise ValueError("Token `font_size` must be a positive number")

    return ChartStyle(**raw)
