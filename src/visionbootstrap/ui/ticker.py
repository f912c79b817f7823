"""Timers that animate the workspace while a synthesis is in flight.

A :class:`GenerationSession` is created when the workspace enters the
generating state and stopped when it leaves it, whatever the outcome. It owns
exactly two :class:`PeriodicTicker` instances:

- the log ticker appends the next line of the scripted progress log
- the clock ticker increments the elapsed-seconds counter

Once :meth:`GenerationSession.stop` returns, neither ticker fires again, so
no log line or elapsed increment can be recorded after the state has moved on.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from .models import LOG_PREFIX, PROGRESS_SCRIPT

logger = logging.getLogger(__name__)


class PeriodicTicker:
    """Calls ``callback`` every ``interval`` seconds on a daemon thread.

    Args:
        interval: Seconds between calls.
        callback: Function called with no arguments.
        name: Thread name (for logs and debugging).
    """

    def __init__(self, interval: float, callback: Callable[[], None], name: str = "ticker"):
        if interval <= 0:
            raise ValueError(f"Ticker interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self.name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start ticking. A ticker can only be started once."""
        if self._thread is not None:
            raise RuntimeError(f"Ticker {self.name} already started")
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.callback()
            except Exception as e:
                logger.error(f"Ticker {self.name} callback failed: {e}", exc_info=True)

    def stop(self) -> None:
        """Stop ticking and wait for an in-progress callback to finish."""
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()


class GenerationSession:
    """Scripted progress log and elapsed-time counter for one synthesis run.

    Usable as a context manager; leaving the ``with`` block stops both
    tickers.

    Args:
        script: Progress lines appended one per ``log_interval``.
        log_interval: Seconds between progress lines.
        clock_interval: Seconds per elapsed-time increment.
    """

    def __init__(
        self,
        script: tuple[str, ...] = PROGRESS_SCRIPT,
        log_interval: float = 0.6,
        clock_interval: float = 1.0,
    ):
        self.script = script
        self._lock = threading.Lock()
        self._log: list[str] = []
        self._next_line = 0
        self._elapsed = 0
        self._stopped = False
        self.log_ticker = PeriodicTicker(log_interval, self._append_next_line, name="progress-log")
        self.clock_ticker = PeriodicTicker(clock_interval, self._tick_clock, name="elapsed-clock")

    def _append_next_line(self) -> None:
        with self._lock:
            if self._stopped or self._next_line >= len(self.script):
                return
            self._log.append(f"{LOG_PREFIX}{self.script[self._next_line]}")
            self._next_line += 1

    def _tick_clock(self) -> None:
        with self._lock:
            if self._stopped:
                return
            self._elapsed += 1

    def start(self) -> GenerationSession:
        logger.debug("Starting generation session tickers")
        self.log_ticker.start()
        self.clock_ticker.start()
        return self

    def stop(self) -> None:
        """Stop both tickers. Safe to call more than once."""
        with self._lock:
            self._stopped = True
        self.log_ticker.stop()
        self.clock_ticker.stop()
        logger.debug("Generation session tickers stopped")

    @property
    def running(self) -> bool:
        return self.log_ticker.running or self.clock_ticker.running

    def snapshot(self) -> tuple[tuple[str, ...], int]:
        """Return the current ``(progress_log, elapsed_seconds)``."""
        with self._lock:
            return tuple(self._log), self._elapsed

    def __enter__(self) -> GenerationSession:
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
