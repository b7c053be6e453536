"""
Terminal rendering of the dashboard with rich.
"""
from typing import TYPE_CHECKING, Optional, Sequence

from rich.console import Console
from rich.table import Table

from pricedash.types import ForecastPoint, SmoothedPoint

if TYPE_CHECKING:
    from pricedash.dashboard import DashboardState

__all__ = [
    "format_price",
    "series_table",
    "forecast_table",
    "watchlist_table",
    "summary_line",
    "render_dashboard",
]


def format_price(value: Optional[float]) -> str:
    """Two decimals with thousands grouping: 1234.5 -> '1,234.50'."""
    if value is None:
        return "—"
    return f"{value:,.2f}"


def _change_markup(current: float, previous: float) -> str:
    delta = current - previous
    pct = delta / previous * 100 if previous else 0.0
    colour = "green" if delta >= 0 else "red"
    return f"[{colour}]{delta:+,.2f} ({pct:+.2f}%)[/{colour}]"


def series_table(points: Sequence[SmoothedPoint], rows: int = 10) -> Table:
    """The most recent `rows` points, newest last."""
    table = Table(title="Price history", title_justify="left")
    table.add_column("Date")
    table.add_column("Price", justify="right")
    table.add_column("MA", justify="right")
    for p in points[-rows:]:
        table.add_row(p.date.isoformat(), format_price(p.price), format_price(p.moving_average))
    return table


def forecast_table(points: Sequence[ForecastPoint]) -> Table:
    table = Table(title="Projection (illustrative, not a prediction)", title_justify="left")
    table.add_column("Month")
    table.add_column("Forecast", justify="right")
    for p in points:
        table.add_row(p.date.strftime("%b %Y"), format_price(p.forecast))
    return table


def watchlist_table(symbols: Sequence[str], current: str) -> Table:
    table = Table(title="Watchlist", title_justify="left")
    table.add_column("Symbol")
    for symbol in symbols:
        table.add_row(f"[bold cyan]{symbol}[/bold cyan]" if symbol == current else symbol)
    return table


def summary_line(state: "DashboardState") -> str:
    """One-line summary of a `DashboardState`."""
    if not state.series:
        return f"[bold]{state.symbol}[/bold] no data"
    last = state.series[-1]
    line = (
        f"[bold]{state.symbol}[/bold] {format_price(last.price)}"
        f"  MA {format_price(last.moving_average)}"
    )
    if len(state.series) > 1:
        line += "  " + _change_markup(last.price, state.series[-2].price)
    return line


# impure
def render_dashboard(state: "DashboardState", console: Console, rows: int = 10) -> None:
    """
    Prints the whole dashboard for a `DashboardState`.
    #impure: Writes to the console.
    """
    console.rule(f"[bold]{state.symbol}[/bold]")
    console.print(summary_line(state))
    if state.refreshed_at is not None:
        console.print(f"Last refresh: {state.refreshed_at:%Y-%m-%d %H:%M:%S}")
    console.print(series_table(state.series, rows))
    console.print(forecast_table(state.forecast))
    if state.watchlist:
        console.print(watchlist_table(state.watchlist, state.symbol))
    for message in state.messages:
        speaker = "You" if message.role == "user" else "Assistant"
        console.print(f"[bold]{speaker}:[/bold] {message.text}")
