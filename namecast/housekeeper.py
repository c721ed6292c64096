"""Housekeeper: periodic eviction of expired sessions.

Sessions normally end with a download or an explicit DELETE. Clients that
abandon a session leave its uploads and renders on disk; the housekeeper
destroys sessions older than the configured TTL.

Environment Variables:
    NAMECAST_SESSION_TTL_MINUTES         Session age limit in minutes; 0 disables (default: 0)
    NAMECAST_HOUSEKEEPING_INTERVAL_MINS  Check interval in minutes (default: 10)
"""

import threading
from typing import Optional

from namecast.logger import Logger, session_logger
from namecast.sessions import SessionManager


class Housekeeper:
    """Runs ``SessionManager.purge_expired`` on a daemon thread."""

    def __init__(
        self,
        session_manager: SessionManager,
        ttl_minutes: int,
        interval_minutes: int = 10,
        logger: Optional[Logger] = None,
    ):
        self.session_manager = session_manager
        self.ttl_seconds = ttl_minutes * 60
        self.interval_seconds = max(1, interval_minutes * 60)
        self.logger = logger or session_logger
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def run_cycle(self) -> int:
        """Purge once. Errors are logged; the loop keeps going."""
        try:
            purged = self.session_manager.purge_expired(self.ttl_seconds)
            self.logger.info("housekeeper.cycle_ok", purged=purged)
            return purged
        except Exception as e:
            self.logger.error("housekeeper.cycle_failed", error=str(e), cause=type(e).__name__)
            return 0

    def start(self) -> None:
        if not self.enabled:
            self.logger.info("housekeeper.disabled", ttl_seconds=self.ttl_seconds)
            return
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="namecast-housekeeper", daemon=True)
        self._thread.start()
        self.logger.info(
            "housekeeper.started",
            ttl_seconds=self.ttl_seconds,
            interval_seconds=self.interval_seconds,
        )

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def _loop(self) -> None:
        while not self._stop.wait(self.interval_seconds):
            self.run_cycle()
