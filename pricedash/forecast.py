"""
Placeholder forward projection.

This is NOT a forecasting model. Each month is the last price nudged by uniform
noise with a slight upward bias (mean drift of about +0.6), so that the dashboard
has something to draw.
"""
import logging
import math
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from pricedash.errors import InvalidArgument
from pricedash.random_source import NumpyRandomSource, RandomSource
from pricedash.types import ForecastPoint

__all__ = ["project", "add_months", "FORECAST_FLOOR", "DEFAULT_HORIZON_MONTHS"]

log = logging.getLogger(__name__)

FORECAST_FLOOR = 5.0
DEFAULT_HORIZON_MONTHS = 6

NOISE_RANGE = 6.0
NOISE_BIAS = 0.4


def add_months(anchor: date, months: int) -> date:
    """
    Moves `anchor` forward by calendar months.

    The day clamps to the last valid day of the target month, and offsets are
    always measured from `anchor`: Jan 31 + 1 is Feb 28 (or 29), Jan 31 + 2 is Mar 31.
    """
    return anchor + relativedelta(months=months)


def project(
    last_price: float,
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
    random_source: Optional[RandomSource] = None,
    today: Optional[date] = None,
) -> List[ForecastPoint]:
    """
    Projects one illustrative price per month after `today`.

    Args:
        last_price: Latest known price. Non-positive values are treated as the floor.
        horizon_months: Number of monthly points to produce.
        random_source: Source of uniform draws. Defaults to an entropy-seeded one.
        today: Anchor date. Defaults to the current date.

    Returns:
        `horizon_months` points in ascending date order, each at least 5.0.
    """
    if horizon_months <= 0:
        raise InvalidArgument(f"horizon_months must be positive, got {horizon_months}.")
    if not math.isfinite(last_price):
        raise InvalidArgument(f"last_price must be finite, got {last_price}.")

    rng = random_source if random_source is not None else NumpyRandomSource()
    anchor = today if today is not None else date.today()
    base = last_price if last_price > 0 else FORECAST_FLOOR

    points = []
    for month in range(1, horizon_months + 1):
        value = max(FORECAST_FLOOR, base + (rng.next() - NOISE_BIAS) * NOISE_RANGE)
        points.append(ForecastPoint(date=add_months(anchor, month), forecast=round(value, 2)))

    log.debug(f"Projected {horizon_months} months from {base:.2f} anchored at {anchor.isoformat()}")
    return points
