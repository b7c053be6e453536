"""
Dashboard orchestration: immutable view state, reducers and the controller.

Reducers are pure functions returning a new `DashboardState`. The controller is the
only place that holds a reference to the current state and swaps it under a lock,
so a timer refresh and a user action never interleave a half-built view.
"""
import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional, Sequence, Tuple

from pricedash.assistant import FALLBACK_REPLY, Responder, ScriptedResponder
from pricedash.config import Config
from pricedash.errors import InvalidArgument
from pricedash.features import smooth
from pricedash.forecast import project
from pricedash.random_source import NumpyRandomSource, RandomSource
from pricedash.scheduler import RefreshTimer
from pricedash.series import generate
from pricedash.types import AdvisoryContext, ChatMessage, ForecastPoint, SmoothedPoint

__all__ = [
    "DashboardState",
    "DashboardController",
    "normalize_symbol",
    "on_symbol_change",
    "on_watchlist_add",
    "on_watchlist_remove",
    "on_message_append",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    symbol: str
    series: Tuple[SmoothedPoint, ...] = ()
    forecast: Tuple[ForecastPoint, ...] = ()
    watchlist: Tuple[str, ...] = ()
    messages: Tuple[ChatMessage, ...] = ()
    refreshed_at: Optional[datetime] = None

    @property
    def last_price(self) -> Optional[float]:
        return self.series[-1].price if self.series else None


def normalize_symbol(symbol: str) -> str:
    """Strips and upper-cases a ticker; blank input is rejected."""
    cleaned = (symbol or "").strip().upper()
    if not cleaned:
        raise InvalidArgument("symbol must be a non-empty string.")
    return cleaned


# §1. Reducers
# --------------------------------------------------------------------------------------


def on_symbol_change(
    state: DashboardState,
    symbol: str,
    series: Sequence[SmoothedPoint],
    forecast: Sequence[ForecastPoint],
    refreshed_at: Optional[datetime] = None,
) -> DashboardState:
    """Replaces the series and forecast wholesale; nothing is merged."""
    return replace(
        state,
        symbol=symbol,
        series=tuple(series),
        forecast=tuple(forecast),
        refreshed_at=refreshed_at,
    )


def on_watchlist_add(state: DashboardState, symbol: str) -> DashboardState:
    symbol = normalize_symbol(symbol)
    if symbol in state.watchlist:
        return state
    return replace(state, watchlist=state.watchlist + (symbol,))


def on_watchlist_remove(state: DashboardState, symbol: str) -> DashboardState:
    symbol = normalize_symbol(symbol)
    if symbol not in state.watchlist:
        return state
    return replace(state, watchlist=tuple(s for s in state.watchlist if s != symbol))


def on_message_append(
    state: DashboardState, message: ChatMessage, history_limit: Optional[int] = None
) -> DashboardState:
    """Appends to the message log, keeping only the newest `history_limit` entries."""
    messages = state.messages + (message,)
    if history_limit is not None:
        messages = messages[-history_limit:]
    return replace(state, messages=messages)


# §2. Controller
# --------------------------------------------------------------------------------------


class DashboardController:
    """
    Owns the dashboard state and runs the generate → smooth → project pipeline.

    Args:
        config: Pipeline and dashboard settings.
        random_source: Draws for the generator and projector. Defaults to a
            `NumpyRandomSource` seeded from `config.run.seed`.
        responder: Advisory capability. Defaults to `ScriptedResponder`.
        clock: Returns "now". Defaults to `datetime.now`.
    """

    def __init__(
        self,
        config: Config,
        random_source: Optional[RandomSource] = None,
        responder: Optional[Responder] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.random_source = random_source or NumpyRandomSource(config.run.seed)
        self.responder = responder or ScriptedResponder()
        self.clock = clock or datetime.now
        self._lock = threading.Lock()
        self._timer: Optional[RefreshTimer] = None

        state = DashboardState(symbol=normalize_symbol(config.dashboard.default_symbol))
        for symbol in config.dashboard.watchlist:
            state = on_watchlist_add(state, symbol)
        self._state = state
        self.select_symbol(state.symbol)

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def last_price(self) -> Optional[float]:
        return self._state.last_price

    def _build(self, symbol: str) -> DashboardState:
        now = self.clock()
        today = now.date()
        series_cfg = self.config.series

        prices = generate(symbol, series_cfg.length, self.random_source, today=today)
        smoothed = smooth(prices, series_cfg.window)
        forecast = project(
            smoothed[-1].price,
            self.config.forecast.horizon_months,
            self.random_source,
            today=today,
        )
        return on_symbol_change(self._state, symbol, smoothed, forecast, refreshed_at=now)

    def select_symbol(self, symbol: str) -> DashboardState:
        symbol = normalize_symbol(symbol)
        with self._lock:
            self._state = self._build(symbol)
        log.info(f"Selected {symbol}: last price {self._state.last_price}")
        return self._state

    def refresh(self) -> DashboardState:
        """Regenerates the current symbol from scratch."""
        with self._lock:
            self._state = self._build(self._state.symbol)
        log.debug(f"Refreshed {self._state.symbol}")
        return self._state

    def add_to_watchlist(self, symbol: str) -> DashboardState:
        with self._lock:
            self._state = on_watchlist_add(self._state, symbol)
        return self._state

    def remove_from_watchlist(self, symbol: str) -> DashboardState:
        with self._lock:
            self._state = on_watchlist_remove(self._state, symbol)
        return self._state

    def _append(self, role: str, text: str) -> None:
        message = ChatMessage(role=role, text=text, sent_at=self.clock())
        with self._lock:
            self._state = on_message_append(
                self._state, message, self.config.dashboard.history_limit
            )

    def send_message(self, text: str) -> str:
        """
        Logs the user's message, asks the responder and logs its reply.

        A failing responder never breaks the view: the reply degrades to
        `FALLBACK_REPLY`.
        """
        self._append("user", text)
        context = AdvisoryContext(symbol=self._state.symbol, last_price=self.last_price)
        try:
            reply = self.responder.respond(text, context)
        except Exception as e:
            log.warning(f"Responder failed, using fallback reply: {e}")
            reply = FALLBACK_REPLY
        self._append("assistant", reply)
        return reply

    def start_auto_refresh(self, interval_seconds: Optional[float] = None) -> RefreshTimer:
        """Starts (or returns the already running) periodic refresh."""
        if self._timer is not None and self._timer.running:
            return self._timer
        interval = (
            interval_seconds if interval_seconds is not None else self.config.dashboard.refresh_seconds
        )
        self._timer = RefreshTimer(interval, self.refresh).start()
        return self._timer

    def stop_auto_refresh(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def __enter__(self) -> "DashboardController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop_auto_refresh()
