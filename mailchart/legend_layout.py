from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math

from mailchart.raster.draw_text import TextMeasurer
from mailchart.style import ChartStyle


@dataclass(frozen=True)
class LegendMetrics:
    padding: float
    marker_diameter: float
    vertical_spacing: float
    horizontal_spacing: float
    series_spacing: float
    bottom_buffer: int

    @property
    def row_height(self) -> float:
        return self.marker_diameter + self.vertical_spacing

    @classmethod
    def from_style(cls, style: ChartStyle) -> "LegendMetrics":
        scale = style.output_scale
        return cls(
            padding=style.legend_padding * scale,
            marker_diameter=style.legend_marker_diameter * scale,
            vertical_spacing=style.legend_vertical_spacing * scale,
            horizontal_spacing=style.legend_horizontal_spacing * scale,
            series_spacing=style.legend_series_spacing * scale,
            bottom_buffer=style.legend_bottom_buffer_px,
        )


@dataclass(frozen=True)
class LegendEntry:
    index: int
    name: str
    text_width: int
    text_height: int

    def width(self, metrics: LegendMetrics) -> float:
        return metrics.marker_diameter + metrics.horizontal_spacing + self.text_width


@dataclass(frozen=True)
class LegendItem:
    index: int
    name: str
    marker_cx: float
    marker_cy: float
    marker_radius: float
    text_x: int
    text_y: int


@dataclass(frozen=True)
class LegendLayout:
    rows: tuple[tuple[LegendItem, ...], ...]
    height: int

    @property
    def visible(self) -> bool:
        return bool(self.rows)

    @property
    def items(self) -> tuple[LegendItem, ...]:
        return tuple(item for row in self.rows for item in row)


EMPTY_LEGEND = LegendLayout(rows=(), height=0)


def pack_rows(entries: Sequence[LegendEntry], canvas_width: int, metrics: LegendMetrics) -> list[list[LegendEntry]]:
    rows: list[list[LegendEntry]] = [[]]
    cursor = metrics.padding
    for entry in entries:
        entry_w = entry.width(metrics)
        if rows[-1] and cursor + entry_w + metrics.padding > canvas_width:
            rows.append([])
            cursor = metrics.padding
        rows[-1].append(entry)
        cursor += entry_w + metrics.series_spacing
    return rows


def row_content_width(row: Sequence[LegendEntry], metrics: LegendMetrics) -> float:
    if not row:
        return 0.0
    return sum(entry.width(metrics) for entry in row) + metrics.series_spacing * (len(row) - 1)


def legend_height(row_count: int, metrics: LegendMetrics) -> int:
    if row_count <= 0:
        return 0
    return int(math.ceil(row_count * metrics.row_height + metrics.padding)) + metrics.bottom_buffer


def layout_legend(
    names: Sequence[str],
    *,
    canvas_width: int,
    canvas_height: int,
    measurer: TextMeasurer,
    style: ChartStyle,
) -> LegendLayout:
    """Pack legend entries into centred rows along the bottom edge of the canvas.

    A single series gets no legend. The returned height is what the plot
    rectangle has to give up so the legend never overlaps the axes.
    """
    if len(names) < 2:
        return EMPTY_LEGEND

    metrics = LegendMetrics.from_style(style)
    entries = []
    for i, name in enumerate(names):
        extent = measurer.measure(name)
        entries.append(LegendEntry(index=i, name=name, text_width=extent.width, text_height=extent.height))

    packed = pack_rows(entries, canvas_width, metrics)
    radius = metrics.marker_diameter / 2
    first_row_top = canvas_height - metrics.bottom_buffer - len(packed) * metrics.row_height

    rows: list[tuple[LegendItem, ...]] = []
    for r, row in enumerate(packed):
        row_top = first_row_top + r * metrics.row_height
        cursor = (canvas_width - row_content_width(row, metrics)) / 2
        items: list[LegendItem] = []
        for entry in row:
            text_x = cursor + metrics.marker_diameter + metrics.horizontal_spacing
            items.append(
                LegendItem(
                    index=entry.index,
                    name=entry.name,
                    marker_cx=cursor + radius,
                    marker_cy=row_top + radius,
                    marker_radius=radius,
                    text_x=int(round(text_x)),
                    text_y=int(round(row_top + (metrics.marker_diameter - entry.text_height) / 2)),
                )
            )
            cursor += entry.width(metrics) + metrics.series_spacing
        rows.append(tuple(items))
    return LegendLayout(rows=tuple(rows), height=legend_height(len(rows), metrics))
