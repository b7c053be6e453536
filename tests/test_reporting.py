"""
Tests for terminal rendering.
"""
from datetime import date, datetime

import pytest
from rich.console import Console

from pricedash.dashboard import DashboardState
from pricedash.types import ChatMessage, ForecastPoint, SmoothedPoint
from pricedash.reporting import (
    format_price,
    forecast_table,
    render_dashboard,
    series_table,
    summary_line,
)


@pytest.fixture
def state() -> DashboardState:
    series = tuple(
        SmoothedPoint(date=date(2024, 3, d), price=p, symbol="TEST", moving_average=ma)
        for d, p, ma in [(8, 100.0, 100.0), (9, 1234.5, 667.25), (10, 1200.0, 850.0)]
    )
    forecast = (
        ForecastPoint(date=date(2024, 4, 10), forecast=1201.5),
        ForecastPoint(date=date(2024, 5, 10), forecast=1199.25),
    )
    messages = (
        ChatMessage(role="user", text="hello", sent_at=datetime(2024, 3, 10, 9)),
        ChatMessage(role="assistant", text="Hi there", sent_at=datetime(2024, 3, 10, 9)),
    )
    return DashboardState(
        symbol="TEST",
        series=series,
        forecast=forecast,
        watchlist=("TEST", "DEMO"),
        messages=messages,
        refreshed_at=datetime(2024, 3, 10, 9, 15),
    )


@pytest.mark.parametrize(
    "value, expected",
    [(1234.5, "1,234.50"), (10.0, "10.00"), (1234567.891, "1,234,567.89"), (None, "—")],
)
def test_format_price(value, expected: str) -> None:
    assert format_price(value) == expected


def test_series_table_limits_rows(state: DashboardState) -> None:
    assert series_table(state.series, rows=2).row_count == 2
    assert series_table(state.series).row_count == 3


def test_forecast_table(state: DashboardState) -> None:
    assert forecast_table(state.forecast).row_count == 2


def test_summary_line(state: DashboardState) -> None:
    line = summary_line(state)
    assert "1,200.00" in line
    assert "MA 850.00" in line
    assert "[red]-34.50" in line


def test_summary_line_without_data() -> None:
    assert "no data" in summary_line(DashboardState(symbol="EMPTY"))


def test_render_dashboard(state: DashboardState) -> None:
    console = Console(record=True, width=120)
    render_dashboard(state, console)
    output = console.export_text()

    assert "TEST" in output
    assert "Price history" in output
    assert "Apr 2024" in output
    assert "Watchlist" in output
    assert "DEMO" in output
    assert "You: hello" in output
    assert "Assistant: Hi there" in output
    assert "Last refresh: 2024-03-10 09:15:00" in output
