"""Periodic clock display refresh.

The ticker only reads elapsed time from the store and writes a display string.
It never mutates the session, so how often it actually fires affects display
smoothness only.
"""
import logging
import threading
from typing import Callable, Optional

from ..utils.constants import DEFAULT_TICK_INTERVAL_S
from .session_store import SessionStore

log = logging.getLogger(__name__)


class ClockDisplayTicker:
    """Refreshes ``display`` from the store every ``interval`` seconds on a daemon thread."""

    def __init__(
        self,
        store: SessionStore,
        interval: float = DEFAULT_TICK_INTERVAL_S,
        on_tick: Optional[Callable[[str], None]] = None,
    ):
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.store = store
        self.interval = interval
        self.on_tick = on_tick
        self.display = store.formatted_elapsed()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_active(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> str:
        """Read the store once and update the display."""
        self.display = self.store.formatted_elapsed()
        if self.on_tick is not None:
            self.on_tick(self.display)
        return self.display

    def start(self) -> None:
        if self.is_active:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="clock-display", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while True:
            try:
                self.tick()
            except Exception:
                log.exception("Clock display refresh failed")
            if self._stop.wait(self.interval):
                break
