from __future__ import annotations

import unittest

import numpy as np

from mailchart.raster import (
    PillowTextMeasurer,
    RasterSurface,
    blend_mask,
    clip_polyline,
    clip_segment,
    draw_line,
    draw_polyline,
    draw_text,
    fill_ellipse,
    fill_rect,
    new_canvas,
    text_size,
)
from mailchart.raster.draw_text import DEFAULT_FONT_FAMILY, _load_font, _render_mask


RED = (255, 0, 0, 255)


class RasterTests(unittest.TestCase):
    def test_default_font_family_is_sans(self) -> None:
        self.assertEqual(DEFAULT_FONT_FAMILY, "DejaVu Sans")

    def test_new_canvas_fills_color(self) -> None:
        canvas = new_canvas(4, 3, color=(1, 2, 3, 4))
        self.assertEqual(canvas.shape, (3, 4, 4))
        self.assertTrue(np.all(canvas == np.asarray([1, 2, 3, 4], dtype=np.uint8)))

    def test_fill_rect_clips_to_canvas(self) -> None:
        canvas = new_canvas(10, 10)
        fill_rect(canvas, -5, 8, 8, 10, RED)
        self.assertEqual(tuple(canvas[9, 2]), RED)
        self.assertEqual(tuple(canvas[9, 3]), (0, 0, 0, 0))
        self.assertEqual(tuple(canvas[7, 0]), (0, 0, 0, 0))

    def test_blend_mask_scales_alpha_by_coverage(self) -> None:
        canvas = new_canvas(4, 4)
        mask = np.zeros((4, 4), dtype=np.uint8)
        mask[1, 1] = 255
        mask[1, 2] = 0
        mask[2, 2] = 51
        blend_mask(canvas, mask, RED)
        self.assertEqual(tuple(canvas[1, 1]), RED)
        self.assertEqual(tuple(canvas[1, 2]), (0, 0, 0, 0))
        self.assertEqual(int(canvas[2, 2, 3]), 51)

    def test_blend_mask_places_small_mask_at_offset_and_clips(self) -> None:
        canvas = new_canvas(5, 5)
        mask = np.full((3, 3), 255, dtype=np.uint8)
        blend_mask(canvas, mask, RED, x=3, y=-1)
        self.assertEqual(np.argwhere(canvas[:, :, 3] > 0).tolist(), [[0, 3], [0, 4], [1, 3], [1, 4]])

    def test_opaque_line_on_transparent_canvas_keeps_exact_color(self) -> None:
        canvas = new_canvas(20, 20)
        draw_line(canvas, (2, 10), (17, 10), RED, width=1)
        self.assertEqual(tuple(canvas[10, 2]), RED)
        self.assertEqual(tuple(canvas[10, 17]), RED)
        self.assertEqual(int(canvas[9, 10, 3]), 0)

    def test_line_width_uses_square_brush(self) -> None:
        canvas = new_canvas(20, 20)
        draw_line(canvas, (5, 10), (15, 10), RED, width=4)
        column = canvas[:, 10, 3]
        self.assertEqual(np.flatnonzero(column).tolist(), [8, 9, 10, 11, 12])

    def test_clip_segment_keeps_inside_endpoints_and_cuts_outside_ones(self) -> None:
        rect = (0, 0, 9, 9)
        self.assertEqual(clip_segment((2, 2), (7, 7), rect), ((2, 2), (7, 7)))
        start, end = clip_segment((5, 5), (5, -1e12), rect)
        self.assertEqual(start, (5, 5))
        self.assertEqual(end[0], 5)
        self.assertAlmostEqual(end[1], 0.0, places=6)
        self.assertIsNone(clip_segment((20, 0), (20, 9), rect))

    def test_clip_polyline_splits_where_line_leaves_rect(self) -> None:
        runs = clip_polyline([(0, 5), (4, 5), (4, 50), (8, 5), (9, 5)], (0, 0, 9, 9))
        self.assertEqual(len(runs), 2)
        self.assertEqual(runs[0][:2], ((0, 5), (4, 5)))
        self.assertEqual(runs[1][-2:], ((8, 5), (9, 5)))
        self.assertEqual(clip_polyline([(3, 30)], (0, 0, 9, 9)), [])

    def test_far_off_canvas_endpoint_only_strokes_visible_pixels(self) -> None:
        canvas = new_canvas(10, 10)
        draw_line(canvas, (5, 5), (5, 1e12), RED, width=1)
        self.assertEqual(np.flatnonzero(canvas[:, 5, 3]).tolist(), [5, 6, 7, 8, 9])
        self.assertEqual(int(canvas[:, :5, 3].max()), 0)

    def test_polyline_clip_rect_bounds_the_brush(self) -> None:
        canvas = new_canvas(20, 20)
        draw_polyline(canvas, [(2, 10), (17, 10)], RED, width=5, clip=(0, 0, 19, 10))
        self.assertEqual(np.flatnonzero(canvas[:, 10, 3]).tolist(), [8, 9, 10])

    def test_translucent_polyline_blends_once_at_joints(self) -> None:
        canvas = new_canvas(20, 20, color=(255, 255, 255, 255))
        draw_polyline(canvas, [(2, 2), (10, 10), (18, 2)], (0, 0, 0, 128), width=3)
        joint = int(canvas[10, 10, 0])
        mid = int(canvas[6, 6, 0])
        self.assertEqual(joint, mid)

    def test_fill_ellipse_covers_center_not_corners(self) -> None:
        canvas = new_canvas(21, 21)
        fill_ellipse(canvas, 10.5, 10.5, 6, 6, RED)
        self.assertEqual(tuple(canvas[10, 10]), RED)
        self.assertEqual(int(canvas[4, 4, 3]), 0)
        self.assertEqual(int(canvas[0, 0, 3]), 0)

    def test_text_renderer_uses_antialias_coverage(self) -> None:
        canvas = new_canvas(220, 80, color=(0, 0, 0, 0))
        draw_text(canvas, 10, 20, "12 Mar", (255, 255, 255, 255), font_size_px=24.0)
        chan = canvas[:, :, 0]
        self.assertTrue(np.any((chan > 0) & (chan < 255)))
        self.assertEqual(int(canvas[0, 0, 3]), 0)

    def test_text_leaves_uncovered_pixels_untouched(self) -> None:
        base = (10, 20, 30, 40)
        canvas = new_canvas(120, 60, color=base)
        draw_text(canvas, -4, 10, "Mar", (255, 255, 255, 255), font_size_px=24.0)
        font = _load_font(DEFAULT_FONT_FAMILY, 24.0)
        mask = _render_mask("Mar", font)
        region = canvas[10 : 10 + mask.shape[0], 0 : mask.shape[1] - 4]
        uncovered = mask[:, 4:] == 0
        self.assertTrue(np.all(region[uncovered] == np.asarray(base, dtype=np.uint8)))
        self.assertTrue(np.any(region[~uncovered][:, 3] > 40))

    def test_text_measurer_matches_text_size(self) -> None:
        measurer = PillowTextMeasurer(font_size_px=22.0)
        extent = measurer.measure("1,024")
        self.assertEqual((extent.width, extent.height), text_size("1,024", font_size_px=22.0))
        self.assertGreater(measurer.measure("longer label").width, extent.width)
        self.assertEqual(measurer.measure("").width, 0)

    def test_cached_glyph_masks_are_read_only(self) -> None:
        font = _load_font(DEFAULT_FONT_FAMILY, 22.0)
        mask = _render_mask("shared", font)
        self.assertFalse(mask.flags.writeable)

    def test_surface_draws_into_its_own_buffer(self) -> None:
        a = RasterSurface(30, 20)
        b = RasterSurface(30, 20)
        a.fill_rect(0, 0, 30, 20, RED)
        self.assertEqual(int(b.pixels[:, :, 3].max()), 0)
        self.assertEqual(a.pixels.shape, (20, 30, 4))


if __name__ == "__main__":
    unittest.main()
