"""Least-squares trend projection over a monthly series."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from scene_engines.analytics.aggregator import shift_month, utc_date
from scene_engines.analytics.models import ForecastPoint, MonthlyBucket

DEFAULT_HORIZON = 3
MIN_FORECAST_POINTS = 2


def fit_line(values: Sequence[float]) -> Tuple[float, float]:
    """Ordinary least squares over x = 1..n; returns (slope, intercept)."""
    n = len(values)
    if n < MIN_FORECAST_POINTS:
        raise ValueError("at least two points are needed to fit a line")
    xs = range(1, n + 1)
    x_mean = (n + 1) / 2
    y_mean = sum(values) / n
    numerator = sum((x - x_mean) * (y - y_mean) for x, y in zip(xs, values))
    denominator = sum((x - x_mean) ** 2 for x in xs)
    slope = numerator / denominator
    return slope, y_mean - slope * x_mean


def _round_non_negative(value: float) -> int:
    # Ties go to the even integer.
    return round(max(0.0, value))


def forecast(
    series: Sequence[MonthlyBucket],
    horizon: int = DEFAULT_HORIZON,
    now: Optional[datetime] = None,
) -> List[ForecastPoint]:
    if len(series) < MIN_FORECAST_POINTS:
        return []
    slope, intercept = fit_line([float(bucket.count) for bucket in series])
    n = len(series)
    anchor = utc_date(now)
    return [
        ForecastPoint(
            month=shift_month(anchor, step),
            predicted=_round_non_negative(intercept + slope * (n + step)),
        )
        for step in range(1, horizon + 1)
    ]
