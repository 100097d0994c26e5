from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

import numpy as np


@dataclass(frozen=True)
class Series:
    name: str
    values: np.ndarray

    def __len__(self) -> int:
        return int(self.values.size)

    @property
    def finite_mask(self) -> np.ndarray:
        return np.isfinite(self.values)


@dataclass(frozen=True)
class ChartDataset:
    labels: tuple[datetime, ...]
    series: tuple[Series, ...]
    y_axis_formatter: str | None = None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.series)

    def max_value(self) -> float | None:
        finite = [s.values[s.finite_mask] for s in self.series]
        finite = [chunk for chunk in finite if chunk.size]
        if not finite:
            return None
        return float(max(float(np.max(chunk)) for chunk in finite))
