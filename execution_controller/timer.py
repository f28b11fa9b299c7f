"""Background thread that runs a callable on a fixed period."""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    def __init__(self, interval: float, action: Callable[[], object], name: str) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive.")
        self._interval = interval
        self._action = action
        self._name = name
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        self._stop_event.set()
        if self._thread is not None and self._thread.is_alive():
            self._thread.join(timeout=timeout)
        self._thread = None

    def _run(self) -> None:
        logger.info("%s started (interval: %ss)", self._name, self._interval)
        while not self._stop_event.wait(self._interval):
            try:
                self._action()
            except Exception:
                logger.exception("%s iteration failed", self._name)
        logger.info("%s stopped", self._name)
