from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from mailchart.adapters.normalize import build_dataset
from mailchart.artifact import ChartImage
from mailchart.composer import LineChart
from mailchart.palette import DEFAULT_PALETTE, Palette
from mailchart.raster.draw_text import TextMeasurer
from mailchart.style import ChartStyle, validate_chart_style


def line_chart(
    *,
    style: ChartStyle | Mapping[str, Any] | None = None,
    palette: Palette | Sequence[str] | None = None,
    measurer: TextMeasurer | None = None,
) -> LineChart:
    if style is None:
        resolved_style = validate_chart_style()
    elif isinstance(style, ChartStyle):
        resolved_style = style
    else:
        resolved_style = validate_chart_style(style)

    if palette is None:
        resolved_palette = DEFAULT_PALETTE
    elif isinstance(palette, Palette):
        resolved_palette = palette
    else:
        resolved_palette = Palette.from_colors(palette)
    return LineChart(style=resolved_style, palette=resolved_palette, measurer=measurer)


def render_line_chart(
    labels: Sequence[Any],
    series: Any,
    *,
    y_axis_formatter: str | None = None,
    width: int | None = None,
    height: int | None = None,
    style: ChartStyle | Mapping[str, Any] | None = None,
    palette: Palette | Sequence[str] | None = None,
) -> ChartImage:
    dataset = build_dataset(labels, series, y_axis_formatter=y_axis_formatter)
    return line_chart(style=style, palette=palette).render(dataset, width=width, height=height)
