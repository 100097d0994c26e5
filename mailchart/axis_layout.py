from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
import math

from mailchart.formatting import XDateFormat, coerce_axis_value, format_value
from mailchart.geometry import CanvasGeometry
from mailchart.raster.draw_text import TextMeasurer
from mailchart.style import ChartStyle


MIN_SCALE_VALUE = 1.0
HOUR_FORMAT_MAX_DAYS = 1
DAY_MONTH_FORMAT_MAX_DAYS = 180


@dataclass(frozen=True)
class YGridline:
    index: int
    value: float
    y: int
    label: str | None
    label_x: int
    label_y: int


@dataclass(frozen=True)
class XTick:
    index: int
    x: int
    label: str
    label_x: int
    label_y: int


def scale_max(max_value: float) -> float:
    if not math.isfinite(max_value) or max_value <= 0:
        return MIN_SCALE_VALUE
    return float(max_value)


def gridline_values(max_value: float, divisions: int = 4) -> list[float]:
    top = scale_max(max_value)
    return [(top / divisions) * k for k in range(divisions + 1)]


def format_y_label(value: float, formatter: str | None) -> str:
    return format_value(coerce_axis_value(value, formatter), formatter, axis=True)


def compute_left_margin(
    max_value: float,
    formatter: str | None,
    measurer: TextMeasurer,
    *,
    divisions: int = 4,
    pad_px: int = 10,
) -> int:
    widest = 0
    for value in gridline_values(max_value, divisions):
        widest = max(widest, measurer.measure(format_y_label(value, formatter)).width)
    return int(widest) + pad_px


def layout_y_axis(
    geometry: CanvasGeometry,
    max_value: float,
    formatter: str | None,
    measurer: TextMeasurer,
    style: ChartStyle,
) -> tuple[YGridline, ...]:
    top = scale_max(max_value)
    lines: list[YGridline] = []
    for k, value in enumerate(gridline_values(max_value, style.y_gridlines)):
        y = geometry.plot_bottom - int((value / top) * geometry.plot_height)
        if k == 0:
            # Bottom label would collide with the first x tick label.
            lines.append(YGridline(index=k, value=value, y=y, label=None, label_x=geometry.plot_x0, label_y=y))
            continue
        label = format_y_label(value, formatter)
        extent = measurer.measure(label)
        lines.append(
            YGridline(
                index=k,
                value=value,
                y=y,
                label=label,
                label_x=geometry.plot_x0 - style.y_label_offset_px - extent.width,
                label_y=int(round(y - extent.height / 2 - 2)),
            )
        )
    return tuple(lines)


def total_days(labels: Sequence[datetime]) -> int:
    if not labels:
        return 0
    return (max(labels) - min(labels)).days


def select_x_format(days: int) -> XDateFormat:
    if days <= HOUR_FORMAT_MAX_DAYS:
        return XDateFormat.HOUR
    if days <= DAY_MONTH_FORMAT_MAX_DAYS:
        return XDateFormat.DAY_MONTH
    return XDateFormat.MONTH_YEAR


def x_tick_indices(label_count: int, max_ticks: int = 10) -> range:
    if label_count <= 0:
        return range(0)
    stride = max(math.ceil(label_count / max_ticks), 1)
    return range(0, label_count, stride)


def layout_x_axis(
    geometry: CanvasGeometry,
    labels: Sequence[datetime],
    measurer: TextMeasurer,
    style: ChartStyle,
) -> tuple[XDateFormat, tuple[XTick, ...]]:
    fmt = select_x_format(total_days(labels))
    count = len(labels)
    step = geometry.plot_width / (count - 1) if count > 1 else 0.0
    ticks: list[XTick] = []
    for i in x_tick_indices(count, style.max_x_ticks):
        label = fmt.format(labels[i])
        x = geometry.plot_x0 + int(i * step)
        extent = measurer.measure(label)
        ticks.append(
            XTick(
                index=i,
                x=x,
                label=label,
                label_x=int(round(x - extent.width / 2)),
                label_y=geometry.plot_bottom + style.x_label_offset_px,
            )
        )
    return fmt, tuple(ticks)
