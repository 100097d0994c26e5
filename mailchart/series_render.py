from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from mailchart.axis_layout import scale_max
from mailchart.dataset import ChartDataset, Series
from mailchart.geometry import CanvasGeometry
from mailchart.palette import Palette
from mailchart.raster.draw_lines import ClipRect, Point, clip_polyline
from mailchart.raster.surface import Surface


@dataclass(frozen=True)
class SeriesPath:
    index: int
    name: str
    runs: tuple[tuple[Point, ...], ...]

    @property
    def segment_count(self) -> int:
        return sum(max(0, len(run) - 1) for run in self.runs)


def _contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def series_runs(series: Series, geometry: CanvasGeometry, max_value: float) -> tuple[tuple[Point, ...], ...]:
    """Map one series onto canvas points, split wherever a value is missing.

    Runs are clipped to the plot rectangle, so values below zero or above the
    axis maximum end at its edge.
    """
    count = len(series)
    step = geometry.plot_width / (count - 1) if count > 1 else 0.0
    top = scale_max(max_value)
    xs = geometry.plot_x0 + np.arange(count, dtype=np.float64) * step
    ys = geometry.plot_bottom - (series.values / top) * geometry.plot_height
    out: list[tuple[Point, ...]] = []
    for start, stop in _contiguous_true_runs(series.finite_mask):
        points = [(float(xs[i]), float(ys[i])) for i in range(start, stop)]
        out.extend(clip_polyline(points, geometry.plot_rect))
    return tuple(out)


def layout_series(dataset: ChartDataset, geometry: CanvasGeometry, max_value: float) -> tuple[SeriesPath, ...]:
    return tuple(
        SeriesPath(index=i, name=s.name, runs=series_runs(s, geometry, max_value))
        for i, s in enumerate(dataset.series)
    )


def draw_series(
    surface: Surface,
    paths: Sequence[SeriesPath],
    palette: Palette,
    *,
    line_width: int,
    clip: ClipRect | None = None,
) -> None:
    for path in paths:
        color = palette.rgba_for(path.index)
        for run in path.runs:
            if len(run) == 1:
                x, y = run[0]
                radius = max(1.0, line_width / 2)
                surface.fill_ellipse(x, y, radius, radius, color)
                continue
            surface.draw_polyline(run, color, width=line_width, clip=clip)
