from __future__ import annotations


class ChartError(Exception):
    """Base class for chart rendering failures raised by mailchart itself."""


class ChartDataError(ChartError, ValueError):
    """Input dataset violates a rendering precondition (empty, no finite points, bad token)."""


class ChartGeometryError(ChartError):
    """Canvas is too small to leave a positive plot rectangle."""
