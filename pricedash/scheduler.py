"""
Cancelable periodic refresh.
"""
import logging
import threading
from typing import Callable, Optional

from pricedash.errors import InvalidArgument

__all__ = ["RefreshTimer"]

log = logging.getLogger(__name__)


class RefreshTimer:
    """
    Calls `callback` every `interval_seconds` on a daemon thread until stopped.

    `start()` and `stop()` are idempotent. Used as a context manager the timer is
    started on entry and always stopped on exit, so no thread outlives its view:

        with RefreshTimer(5.0, controller.refresh):
            ...
    """

    def __init__(self, interval_seconds: float, callback: Callable[[], object]):
        if interval_seconds <= 0:
            raise InvalidArgument(f"interval_seconds must be positive, got {interval_seconds}.")
        self.interval_seconds = interval_seconds
        self._callback = callback
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "RefreshTimer":
        with self._lock:
            if self.running:
                return self
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._run, name="pricedash-refresh", daemon=True)
            self._thread.start()
        log.info(f"Refresh timer started ({self.interval_seconds}s interval)")
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            thread = self._thread
            self._thread = None
            self._stop_event.set()
        if thread is None:
            return
        if thread is not threading.current_thread():
            thread.join(timeout)
        log.info(f"Refresh timer stopped after {self.ticks} refreshes")

    def _run(self) -> None:
        # wait() returns True once stop() sets the event
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self._callback()
            except Exception as e:
                log.warning(f"Refresh callback failed: {e}")
                continue
            self.ticks += 1

    def __enter__(self) -> "RefreshTimer":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
