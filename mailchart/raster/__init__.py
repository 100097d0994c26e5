from .canvas import RGBA, blend_mask, fill_rect, new_canvas
from .draw_lines import clip_polyline, clip_segment, draw_line, draw_polyline
from .draw_markers import fill_ellipse
from .draw_text import PillowTextMeasurer, TextExtent, TextMeasurer, draw_text, text_size
from .surface import RasterSurface, Surface

__all__ = [
    "PillowTextMeasurer",
    "RGBA",
    "RasterSurface",
    "Surface",
    "TextExtent",
    "TextMeasurer",
    "blend_mask",
    "clip_polyline",
    "clip_segment",
    "draw_line",
    "draw_polyline",
    "draw_text",
    "fill_ellipse",
    "fill_rect",
    "new_canvas",
    "text_size",
]
