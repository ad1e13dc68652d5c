"""Periodic background timer.

Runs a callback every `interval` seconds on a dedicated daemon thread until
stopped. Use it as a context manager so the thread is always released:

    with PeriodicTimer(60, scheduler.run_cycle, name="tick"):
        shutdown_event.wait()
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class PeriodicTimer:
    def __init__(self, interval: float, callback: Callable[[], object], name: str = "PeriodicTimer"):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._interval = interval
        self._callback = callback
        self._name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start ticking. No-op if already running."""
        with self._lock:
            if self.is_running:
                return
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Stop ticking and join the thread. Safe to call multiple times."""
        with self._lock:
            self._stop_event.set()
            thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception:
                # A failed tick must not kill the timer; the next tick retries
                logger.exception("%s callback failed", self._name)

    def __enter__(self) -> PeriodicTimer:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
