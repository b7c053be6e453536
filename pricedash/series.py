"""
Synthetic daily price series.

The series is a seeded random walk with a slow sinusoidal drift. It stands in for
market data; nothing here is fetched or persisted.
"""
import logging
import math
from datetime import date, timedelta
from typing import List, Optional

from pricedash.errors import InvalidArgument
from pricedash.random_source import NumpyRandomSource, RandomSource
from pricedash.types import PricePoint

__all__ = ["generate", "PRICE_FLOOR", "DEFAULT_LENGTH"]

log = logging.getLogger(__name__)

PRICE_FLOOR = 10.0
DEFAULT_LENGTH = 121  # 120 trailing days plus today

START_PRICE_LOW = 100.0
START_PRICE_SPAN = 50.0
DRIFT_AMPLITUDE = 0.2
DRIFT_PERIOD = 9.0
NOISE_SCALE = 0.8


def _drift(days_left: int, draw: float) -> float:
    """Periodic component plus bounded noise for one step of the walk."""
    return DRIFT_AMPLITUDE * math.sin(days_left / DRIFT_PERIOD) + (draw - 0.5) * NOISE_SCALE


def generate(
    symbol: str,
    length: int = DEFAULT_LENGTH,
    random_source: Optional[RandomSource] = None,
    today: Optional[date] = None,
    start_price: Optional[float] = None,
) -> List[PricePoint]:
    """
    Generates a synthetic daily price series ending today.

    The oldest point carries the starting price. Every later point adds
    `0.2 * sin(i / 9)` plus uniform noise in [-0.4, 0.4), where `i` is the number
    of days left until `today`. Prices never drop below 10.

    Args:
        symbol: Label attached to every point. Must not be blank.
        length: Number of daily points, including today.
        random_source: Source of uniform draws. Defaults to an entropy-seeded one.
        today: Last day of the series. Defaults to the current date.
        start_price: Pins the first price instead of drawing it from [100, 150).

    Returns:
        A list of `length` points in ascending date order.
    """
    if not symbol or not symbol.strip():
        raise InvalidArgument("symbol must be a non-empty string.")
    if length <= 0:
        raise InvalidArgument(f"length must be positive, got {length}.")

    rng = random_source if random_source is not None else NumpyRandomSource()
    end = today if today is not None else date.today()

    if start_price is None:
        start_price = START_PRICE_LOW + rng.next() * START_PRICE_SPAN
    price = max(PRICE_FLOOR, start_price)

    points = []
    for k in range(length):
        days_left = length - 1 - k
        if k > 0:
            price = max(PRICE_FLOOR, price + _drift(days_left, rng.next()))
        points.append(
            PricePoint(
                date=end - timedelta(days=days_left),
                price=round(price, 2),
                symbol=symbol,
            )
        )

    log.debug(f"Generated {len(points)} points for {symbol} ending {end.isoformat()}")
    return points
