"""
Shared data structures for the application.
"""
import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["PricePoint", "SmoothedPoint", "ForecastPoint", "AdvisoryContext", "ChatMessage"]


class PricePoint(BaseModel):
    """
    A single daily closing price for a symbol.
    """

    model_config = ConfigDict(frozen=True)  # Points are never mutated once emitted

    date: dt.date = Field(..., description="The calendar day of the observation.")
    price: float = Field(..., gt=0, description="The closing price, rounded to 2 decimals.")
    symbol: str = Field(..., min_length=1, description="The symbol the series belongs to.")


class SmoothedPoint(PricePoint):
    """
    A price point carrying the trailing moving average for its index.
    """

    moving_average: float = Field(..., description="Mean price over the trailing window.")


class ForecastPoint(BaseModel):
    """
    One month of the placeholder projection. Illustrative only.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(..., description="The projected calendar day.")
    forecast: float = Field(..., gt=0, description="The projected price, floored at 5.")


class AdvisoryContext(BaseModel):
    """What the assistant is told about the current view."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    last_price: Optional[float] = None


class ChatMessage(BaseModel):
    """A single entry of the dashboard's message log."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    text: str
    sent_at: dt.datetime
