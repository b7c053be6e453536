"""
Feature engineering: trailing moving average and tabular views of a series.

Functions in this module are pure and never modify their inputs.
"""
from typing import List, Sequence

import pandas as pd
from pydantic import BaseModel

from pricedash.errors import InvalidArgument
from pricedash.types import PricePoint, SmoothedPoint

__all__ = ["smooth", "add_moving_average", "to_frame", "DEFAULT_WINDOW"]

DEFAULT_WINDOW = 14


def add_moving_average(
    df: pd.DataFrame, window: int = DEFAULT_WINDOW, column: str = "price"
) -> pd.DataFrame:
    """
    Adds a trailing moving average of `column`.

    The window shrinks at the start of the frame (`min_periods=1`), so every row
    gets a value: row 0 is its own average, row 1 the mean of the first two, and so on
    until the full window is available.

    Args:
        df: Input DataFrame holding `column`.
        window: Number of trailing rows to average.
        column: Name of the column to smooth.

    Returns:
        A new DataFrame with a `moving_average` column rounded to 2 decimals.
    """
    if window <= 0:
        raise InvalidArgument(f"window must be positive, got {window}.")
    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found in DataFrame.")

    rolling = df[column].rolling(window=window, min_periods=1)
    return df.assign(moving_average=rolling.mean().round(2))


def smooth(series: Sequence[PricePoint], window: int = DEFAULT_WINDOW) -> List[SmoothedPoint]:
    """
    Attaches a trailing moving average to every point of `series`.

    Index `i` averages the prices at `max(0, i - window + 1)` through `i`.
    Empty input returns an empty list.
    """
    if window <= 0:
        raise InvalidArgument(f"window must be positive, got {window}.")
    if not series:
        return []

    prices = pd.DataFrame({"price": [p.price for p in series]})
    averages = add_moving_average(prices, window)["moving_average"]

    return [
        SmoothedPoint(date=p.date, price=p.price, symbol=p.symbol, moving_average=float(ma))
        for p, ma in zip(series, averages)
    ]


def to_frame(points: Sequence[BaseModel]) -> pd.DataFrame:
    """Tabulates a sequence of points, indexed by date."""
    if not points:
        return pd.DataFrame()
    return pd.DataFrame([p.model_dump() for p in points]).set_index("date")
