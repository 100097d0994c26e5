from mailchart.adapters.normalize import build_dataset, dataset_from_frame
from mailchart.api import line_chart, render_line_chart
from mailchart.artifact import ChartImage
from mailchart.composer import ChartPlan, LineChart
from mailchart.dataset import ChartDataset, Series
from mailchart.errors import ChartDataError, ChartError, ChartGeometryError
from mailchart.geometry import CanvasGeometry
from mailchart.palette import DEFAULT_PALETTE, Palette
from mailchart.style import DEFAULT_STYLE, ChartStyle, validate_chart_style

__all__ = [
    "CanvasGeometry",
    "ChartDataError",
    "ChartDataset",
    "ChartError",
    "ChartGeometryError",
    "ChartImage",
    "ChartPlan",
    "ChartStyle",
    "DEFAULT_PALETTE",
    "DEFAULT_STYLE",
    "LineChart",
    "Palette",
    "Series",
    "build_dataset",
    "dataset_from_frame",
    "line_chart",
    "render_line_chart",
    "validate_chart_style",
]
