from __future__ import annotations

import unittest

from mailchart.legend_layout import EMPTY_LEGEND, LegendMetrics, layout_legend, legend_height
from mailchart.raster.draw_text import TextExtent
from mailchart.style import DEFAULT_STYLE, validate_chart_style


class FixedWidthMeasurer:
    def __init__(self, char_width: int = 10, height: int = 20) -> None:
        self.char_width = char_width
        self.height = height

    def measure(self, text: str) -> TextExtent:
        return TextExtent(width=len(text) * self.char_width, height=self.height)


def _layout(names, width: int = 800, height: int = 400, char_width: int = 10):
    return layout_legend(
        names,
        canvas_width=width,
        canvas_height=height,
        measurer=FixedWidthMeasurer(char_width=char_width),
        style=DEFAULT_STYLE,
    )


class LegendLayoutTests(unittest.TestCase):
    def test_no_legend_for_single_series(self) -> None:
        self.assertIs(_layout(["only"]), EMPTY_LEGEND)
        self.assertEqual(_layout([]).height, 0)
        self.assertFalse(_layout(["only"]).visible)

    def test_single_row_height(self) -> None:
        layout = _layout(["alpha", "beta"])
        self.assertEqual(len(layout.rows), 1)
        # one row of (20 + 10) plus 20 padding, plus the 5px buffer
        self.assertEqual(layout.height, 55)

    def test_metrics_scale_with_output_scale(self) -> None:
        metrics = LegendMetrics.from_style(validate_chart_style({"output_scale": 3}))
        self.assertEqual(metrics.marker_diameter, 30.0)
        self.assertEqual(metrics.padding, 30.0)
        self.assertEqual(metrics.bottom_buffer, 5)

    def test_entries_wrap_when_row_is_full(self) -> None:
        names = [f"series-{i:03d}" for i in range(3)]
        layout = _layout(names, width=400, height=300, char_width=12)
        self.assertEqual([len(row) for row in layout.rows], [2, 1])
        self.assertEqual(layout.height, 85)

    def test_height_grows_with_row_count(self) -> None:
        names = [f"name {i}" for i in range(12)]
        previous_rows = 0
        previous_height = 0
        for width in (1600, 800, 500, 300):
            layout = _layout(names, width=width)
            self.assertGreaterEqual(len(layout.rows), previous_rows)
            if len(layout.rows) > previous_rows:
                self.assertGreater(layout.height, previous_height)
            previous_rows = len(layout.rows)
            previous_height = layout.height
        metrics = LegendMetrics.from_style(DEFAULT_STYLE)
        heights = [legend_height(rows, metrics) for rows in range(1, 6)]
        self.assertEqual(heights, sorted(set(heights)))

    def test_each_row_is_centred(self) -> None:
        names = ["a", "much longer name", "mid name", "x", "another entry", "tail"]
        width = 500
        layout = _layout(names, width=width)
        self.assertGreater(len(layout.rows), 1)
        for row in layout.rows:
            first, last = row[0], row[-1]
            left = first.marker_cx - first.marker_radius
            right = last.text_x + len(last.name) * 10
            self.assertAlmostEqual((left + right) / 2, width / 2, delta=1.0)

    def test_oversized_entry_gets_its_own_row(self) -> None:
        layout = _layout(["x" * 200, "y"], width=400)
        self.assertEqual([len(row) for row in layout.rows], [1, 1])
        self.assertTrue(all(row for row in layout.rows))

    def test_items_keep_series_order_and_stay_above_bottom(self) -> None:
        names = [f"s{i}" for i in range(5)]
        layout = _layout(names, width=300, height=400)
        self.assertEqual([item.index for item in layout.items], list(range(5)))
        for item in layout.items:
            self.assertLessEqual(item.marker_cy + item.marker_radius, 400 - 5)
            self.assertGreaterEqual(item.marker_cy - item.marker_radius, 400 - layout.height)


if __name__ == "__main__":
    unittest.main()
