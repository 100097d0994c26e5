from __future__ import annotations

from dataclasses import dataclass
import logging

from mailchart.artifact import ChartImage
from mailchart.axis_layout import XTick, YGridline, compute_left_margin, layout_x_axis, layout_y_axis
from mailchart.dataset import ChartDataset
from mailchart.errors import ChartDataError
from mailchart.formatting import XDateFormat
from mailchart.geometry import CanvasGeometry, compute_geometry
from mailchart.legend_layout import LegendLayout, layout_legend
from mailchart.palette import DEFAULT_PALETTE, Palette
from mailchart.raster.draw_text import PillowTextMeasurer, TextMeasurer
from mailchart.raster.surface import RasterSurface, Surface
from mailchart.series_render import SeriesPath, draw_series, layout_series
from mailchart.style import DEFAULT_STYLE, ChartStyle


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartPlan:
    dataset: ChartDataset
    geometry: CanvasGeometry
    max_value: float
    y_gridlines: tuple[YGridline, ...]
    x_format: XDateFormat
    x_ticks: tuple[XTick, ...]
    series_paths: tuple[SeriesPath, ...]
    legend: LegendLayout


class LineChart:
    """Lays out and rasterises a time-series line chart.

    ``plan`` is pure and needs no canvas; ``draw`` only consumes a finished
    plan. The instance holds configuration only, so one chart object can
    render many datasets, including from several threads at once.
    """

    def __init__(
        self,
        style: ChartStyle = DEFAULT_STYLE,
        palette: Palette = DEFAULT_PALETTE,
        measurer: TextMeasurer | None = None,
    ) -> None:
        self.style = style
        self.palette = palette
        self.measurer: TextMeasurer = measurer or PillowTextMeasurer(
            font_family=style.font_family,
            font_size_px=style.font_size_px,
        )

    def canvas_size(self, width: int | None = None, height: int | None = None) -> tuple[int, int]:
        w = self.style.default_width if width is None else int(width)
        h = self.style.default_height if height is None else int(height)
        if w <= 0 or h <= 0:
            raise ChartDataError("chart width/height must be > 0")
        return (w * self.style.output_scale, h * self.style.output_scale)

    def plan(self, dataset: ChartDataset, width: int | None = None, height: int | None = None) -> ChartPlan:
        if not dataset.labels:
            raise ChartDataError("chart needs at least one label")
        if not dataset.series:
            raise ChartDataError("chart needs at least one series")
        max_value = dataset.max_value()
        if max_value is None:
            raise ChartDataError("series contain no finite points")

        style = self.style
        canvas_w, canvas_h = self.canvas_size(width, height)
        formatter = dataset.y_axis_formatter

        left_margin = compute_left_margin(
            max_value,
            formatter,
            self.measurer,
            divisions=style.y_gridlines,
            pad_px=style.y_label_pad_px,
        )
        legend = layout_legend(
            dataset.names,
            canvas_width=canvas_w,
            canvas_height=canvas_h,
            measurer=self.measurer,
            style=style,
        )
        geometry = compute_geometry(
            canvas_width=canvas_w,
            canvas_height=canvas_h,
            left_margin=left_margin,
            legend_height=legend.height,
            style=style,
        )
        y_gridlines = layout_y_axis(geometry, max_value, formatter, self.measurer, style)
        x_format, x_ticks = layout_x_axis(geometry, dataset.labels, self.measurer, style)
        series_paths = layout_series(dataset, geometry, max_value)
        LOGGER.debug(
            "planned line chart %dx%d: plot=(%d,%d %dx%d) legend_rows=%d x_format=%s",
            canvas_w,
            canvas_h,
            geometry.plot_x0,
            geometry.plot_y0,
            geometry.plot_width,
            geometry.plot_height,
            len(legend.rows),
            x_format.value,
        )
        return ChartPlan(
            dataset=dataset,
            geometry=geometry,
            max_value=max_value,
            y_gridlines=y_gridlines,
            x_format=x_format,
            x_ticks=x_ticks,
            series_paths=series_paths,
            legend=legend,
        )

    def draw(self, plan: ChartPlan, surface: Surface) -> None:
        style = self.style
        geo = plan.geometry
        line_color = style.rgba("line_color")
        text_color = style.rgba("text_color")
        grid_w = max(1, int(round(style.gridline_width * geo.scale)))

        surface.fill_rect(geo.plot_x0, geo.plot_y0, geo.plot_width, geo.plot_height, style.rgba("plot_background"))

        for line in plan.y_gridlines:
            surface.draw_line((geo.plot_x0, line.y), (geo.plot_right, line.y), line_color, width=grid_w)
            if line.label is None:
                continue
            surface.draw_line((geo.plot_x0 - style.tick_length_px, line.y), (geo.plot_x0, line.y), line_color, width=grid_w)
            surface.draw_text(line.label_x, line.label_y, line.label, text_color)

        for tick in plan.x_ticks:
            surface.draw_line(
                (tick.x, geo.plot_bottom),
                (tick.x, geo.plot_bottom + style.tick_length_px),
                line_color,
                width=grid_w,
            )
            surface.draw_text(tick.label_x, tick.label_y, tick.label, text_color)

        draw_series(
            surface,
            plan.series_paths,
            self.palette,
            line_width=max(1, int(round(style.series_line_width * geo.scale))),
            clip=geo.plot_rect,
        )

        for item in plan.legend.items:
            surface.fill_ellipse(
                item.marker_cx,
                item.marker_cy,
                item.marker_radius,
                item.marker_radius,
                self.palette.rgba_for(item.index),
            )
            surface.draw_text(item.text_x, item.text_y, item.name, text_color)

    def render(self, dataset: ChartDataset, width: int | None = None, height: int | None = None) -> ChartImage:
        plan = self.plan(dataset, width, height)
        surface = RasterSurface(
            plan.geometry.canvas_width,
            plan.geometry.canvas_height,
            font_family=self.style.font_family,
            font_size_px=self.style.font_size_px,
        )
        self.draw(plan, surface)
        return ChartImage(rgba=surface.pixels, scale=self.style.output_scale)
