from __future__ import annotations

from dataclasses import dataclass

from mailchart.errors import ChartGeometryError
from mailchart.style import ChartStyle


@dataclass(frozen=True)
class CanvasGeometry:
    """Plot rectangle for one render, in output pixels.

    Every drawing step reads positions from this object; nothing downstream
    recomputes margins on its own.
    """

    canvas_width: int
    canvas_height: int
    scale: int
    left_margin: int
    legend_height: int
    plot_x0: int
    plot_y0: int
    plot_width: int
    plot_height: int

    @property
    def plot_right(self) -> int:
        return self.plot_x0 + self.plot_width

    @property
    def plot_bottom(self) -> int:
        return self.plot_y0 + self.plot_height

    @property
    def plot_rect(self) -> tuple[int, int, int, int]:
        return (self.plot_x0, self.plot_y0, self.plot_right, self.plot_bottom)


def compute_geometry(
    *,
    canvas_width: int,
    canvas_height: int,
    left_margin: int,
    legend_height: int,
    style: ChartStyle,
) -> CanvasGeometry:
    plot_width = canvas_width - left_margin - style.right_padding_px
    plot_height = canvas_height - style.top_padding_px - style.bottom_padding_px - legend_height
    if plot_width <= 0 or plot_height <= 0:
        raise ChartGeometryError(
            f"canvas {canvas_width}x{canvas_height} leaves no plot area "
            f"(left margin {left_margin}, legend {legend_height})"
        )
    return CanvasGeometry(
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        scale=style.output_scale,
        left_margin=left_margin,
        legend_height=legend_height,
        plot_x0=left_margin,
        plot_y0=style.top_padding_px,
        plot_width=plot_width,
        plot_height=plot_height,
    )
