from __future__ import annotations

import logging
import threading

from lispcore.sessions.manager import SessionManager

logger = logging.getLogger(__name__)


class IdleReaper:
    """Background thread that periodically evicts idle sessions."""

    def __init__(self, manager: SessionManager, interval: float):
        self.manager = manager
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="lispcore-reaper", daemon=True)
        self._thread.start()
        logger.debug("Idle reaper started (interval=%ss)", self.interval)

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.manager.evict_idle()
            except Exception:
                logger.exception("Idle eviction failed")

    def __enter__(self) -> IdleReaper:
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
