from __future__ import annotations

from datetime import datetime
from enum import Enum
import math

from mailchart.errors import ChartDataError


FILESIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
DURATION_UNITS = (("d", 86400), ("h", 3600), ("m", 60), ("s", 1))
FORMATTER_TOKENS = frozenset({"number", "percent", "filesize", "duration"})


class XDateFormat(str, Enum):
    HOUR = "hour"
    DAY_MONTH = "day_month"
    MONTH_YEAR = "month_year"

    def format(self, value: datetime) -> str:
        if value.tzinfo is not None:
            value = value.astimezone()
        if self is XDateFormat.HOUR:
            return f"{value:%H}:00"
        if self is XDateFormat.DAY_MONTH:
            return f"{value.day} {value:%b}"
        return f"{value:%b} '{value:%y}"


def coerce_axis_value(value: float, token: str | None) -> float | int:
    """Y values are rounded to integers when no formatter token is set."""
    if is_blank_token(token):
        return int(round(value))
    return float(value)


def is_blank_token(token: str | None) -> bool:
    return token is None or not token.strip()


def format_value(value: float | int, token: str | None = None, *, axis: bool = False) -> str:
    if is_blank_token(token):
        return _format_plain(value)
    assert token is not None
    name = token.strip().lower()
    if name == "number":
        return _format_number(float(value), axis=axis)
    if name == "percent":
        return _format_percent(float(value), axis=axis)
    if name == "filesize":
        return _format_filesize(float(value), axis=axis)
    if name == "duration":
        return _format_duration(float(value), axis=axis)
    raise ChartDataError(f"unknown value formatter: {token}")


def _format_plain(value: float | int) -> str:
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _trim(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _format_number(value: float, *, axis: bool) -> str:
    if axis and abs(value) >= 100:
        return _trim(f"{value:,.0f}")
    return _trim(f"{value:,.2f}")


def _format_percent(value: float, *, axis: bool) -> str:
    if axis:
        return f"{_trim(f'{value:.0f}')}%"
    return f"{_trim(f'{value:.1f}')}%"


def _format_filesize(value: float, *, axis: bool) -> str:
    size = abs(value)
    unit = 0
    while size >= 1024 and unit < len(FILESIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    sign = "-" if value < 0 else ""
    decimals = 1 if axis else 2
    return f"{sign}{_trim(f'{size:.{decimals}f}')} {FILESIZE_UNITS[unit]}"


def _format_duration(value: float, *, axis: bool) -> str:
    remaining = int(round(abs(value)))
    if remaining == 0:
        return "0s"
    parts: list[str] = []
    for suffix, seconds in DURATION_UNITS:
        count, remaining = divmod(remaining, seconds)
        if count:
            parts.append(f"{count}{suffix}")
    if axis:
        parts = parts[:2]
    sign = "-" if value < 0 else ""
    return sign + " ".join(parts)
