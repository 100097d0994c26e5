import unittest

from mailchart.errors import ChartDataError
from mailchart.formatting import coerce_axis_value, format_value


class FormattingTests(unittest.TestCase):
    def test_blank_token_formats_integers(self) -> None:
        self.assertEqual(format_value(coerce_axis_value(1234.4, None), None, axis=True), "1234")
        self.assertEqual(format_value(coerce_axis_value(7.0, "  "), "  ", axis=True), "7")
        self.assertEqual(format_value(2.5), "2.5")

    def test_number_token(self) -> None:
        self.assertEqual(format_value(1234.5, "number", axis=True), "1,234")
        self.assertEqual(format_value(1234.5, "number"), "1,234.5")
        self.assertEqual(format_value(12.25, "number", axis=True), "12.25")

    def test_percent_token(self) -> None:
        self.assertEqual(format_value(45.0, "percent", axis=True), "45%")
        self.assertEqual(format_value(45.25, "percent"), "45.2%")

    def test_filesize_token(self) -> None:
        self.assertEqual(format_value(0, "filesize", axis=True), "0 B")
        self.assertEqual(format_value(1536, "filesize", axis=True), "1.5 KB")
        self.assertEqual(format_value(1024**3, "FileSize", axis=True), "1 GB")
        self.assertEqual(format_value(1.25 * 1024**2, "filesize"), "1.25 MB")

    def test_duration_token(self) -> None:
        self.assertEqual(format_value(0, "duration", axis=True), "0s")
        self.assertEqual(format_value(3900, "duration", axis=True), "1h 5m")
        self.assertEqual(format_value(90061, "duration"), "1d 1h 1m 1s")
        self.assertEqual(format_value(90061, "duration", axis=True), "1d 1h")

    def test_unknown_token_is_a_data_error(self) -> None:
        with self.assertRaisesRegex(ChartDataError, "unknown value formatter"):
            format_value(1.0, "currency")


if __name__ == "__main__":
    unittest.main()
