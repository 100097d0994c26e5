from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
import logging
from typing import Any

import numpy as np

from mailchart.dataset import ChartDataset, Series
from mailchart.errors import ChartDataError
from mailchart.formatting import FORMATTER_TOKENS, is_blank_token


LOGGER = logging.getLogger(__name__)

try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def build_dataset(
    labels: Sequence[Any],
    series: Any,
    *,
    y_axis_formatter: str | None = None,
) -> ChartDataset:
    label_values = coerce_labels(labels)
    if not label_values:
        raise ChartDataError("chart needs at least one label")

    series_values = coerce_series(series)
    if not series_values:
        raise ChartDataError("chart needs at least one series")

    if not is_blank_token(y_axis_formatter):
        assert y_axis_formatter is not None
        if y_axis_formatter.strip().lower() not in FORMATTER_TOKENS:
            raise ChartDataError(f"unknown value formatter: {y_axis_formatter}")

    for item in series_values:
        if len(item) != len(label_values):
            LOGGER.warning(
                "series %r has %d values but chart has %d labels",
                item.name,
                len(item),
                len(label_values),
            )

    dataset = ChartDataset(labels=label_values, series=series_values, y_axis_formatter=y_axis_formatter)
    if dataset.max_value() is None:
        raise ChartDataError("series contain no finite points")
    return dataset


def dataset_from_frame(frame: Any, *, y_axis_formatter: str | None = None) -> ChartDataset:
    """Build a dataset from a DataFrame indexed by timestamp, one series per numeric column."""
    if pd is None:
        raise ChartDataError("pandas is required for dataset_from_frame")
    if not isinstance(frame, pd.DataFrame):
        raise ChartDataError("frame must be a pandas DataFrame")
    numeric_cols = [c for c in frame.columns if _is_numeric_dtype(frame[c])]
    if not numeric_cols:
        raise ChartDataError("frame has no numeric columns")
    labels = list(pd.to_datetime(frame.index).to_pydatetime())
    series = [(str(col), frame[col]) for col in numeric_cols]
    return build_dataset(labels, series, y_axis_formatter=y_axis_formatter)


def coerce_labels(labels: Sequence[Any]) -> tuple[datetime, ...]:
    if isinstance(labels, (str, bytes, bytearray)):
        raise ChartDataError("labels must be a sequence of timestamps")
    out = tuple(_coerce_label(raw, index=i) for i, raw in enumerate(labels))
    aware = {value.tzinfo is not None for value in out}
    if len(aware) > 1:
        raise ChartDataError("labels mix timezone-aware and naive timestamps")
    return out


def coerce_series(series: Any) -> tuple[Series, ...]:
    if isinstance(series, Mapping):
        pairs: list[tuple[Any, Any]] = list(series.items())
    elif isinstance(series, Sequence) and not isinstance(series, (str, bytes, bytearray)):
        pairs = []
        for i, item in enumerate(series):
            if isinstance(item, Series):
                pairs.append((item.name, item.values))
            elif isinstance(item, Sequence) and len(item) == 2 and isinstance(item[0], str):
                pairs.append((item[0], item[1]))
            else:
                raise ChartDataError(f"series entry {i} must be a Series or a (name, values) pair")
    else:
        raise ChartDataError(f"unsupported series input type: {type(series)!r}")

    out: list[Series] = []
    for name, values in pairs:
        arr = _coerce_1d_numeric(values, label=f"series {name!r}")
        if arr.size == 0:
            raise ChartDataError(f"series {name!r} is empty")
        arr.flags.writeable = False
        out.append(Series(name=str(name), values=arr))
    return tuple(out)


def _coerce_label(raw: Any, *, index: int) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime.combine(raw, time.min)
    if isinstance(raw, np.datetime64):
        if np.isnat(raw):
            raise ChartDataError(f"label {index} is NaT")
        return raw.astype("datetime64[us]").item()
    if isinstance(raw, str):
        try:
            # Python 3.10 fromisoformat has no "Z" suffix support.
            text = raw.strip()
            if text[-1:] in ("Z", "z"):
                text = text[:-1] + "+00:00"
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise ChartDataError(f"label {index} is not an ISO timestamp: {raw!r}") from exc
    raise ChartDataError(f"label {index} is not a timestamp: {raw!r}")


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    return bool(pd.api.types.is_numeric_dtype(series))


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(list(value), dtype=object), label=label)

    raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise ChartDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
