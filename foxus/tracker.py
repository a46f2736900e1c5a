"""Background polling of the active window into recorded activities."""

from __future__ import annotations

import logging
import sqlite3
import threading
from dataclasses import dataclass

from foxus.activity import Activity
from foxus.categorizer import Categorizer
from foxus.db import Database
from foxus.focus_session import current_timestamp
from foxus.platform import PlatformTracker, StubTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackerConfig:
    """How often to poll and how long without input counts as idle."""

    poll_interval_secs: int = 5
    idle_threshold_secs: int = 120


class TrackerService:
    """Records the foreground app at a fixed interval on a worker thread."""

    def __init__(
        self,
        db: Database,
        categorizer: Categorizer,
        config: TrackerConfig | None = None,
        platform: PlatformTracker | None = None,
    ) -> None:
        self._db = db
        self._categorizer = categorizer
        self.config = config if config is not None else TrackerConfig()
        self._platform = platform if platform is not None else StubTracker()
        self._running = threading.Event()
        self._stop_requested = threading.Event()

    def poll_once(self) -> Activity | None:
        """Record the active window unless the user is idle; return what was saved."""
        if self._platform.get_idle_time_secs() >= self.config.idle_threshold_secs:
            return None
        window = self._platform.get_active_window()
        if window is None:
            return None

        activity = Activity(
            timestamp=current_timestamp(),
            duration_secs=self.config.poll_interval_secs,
            source="app",
            app_name=window.app_name,
            window_title=window.window_title,
            category_id=self._categorizer.categorize_app(
                window.app_name, window.window_title
            ),
        )
        try:
            with self._db.lock:
                activity.save(self._db.connection)
        except sqlite3.Error as exc:
            logger.error("Failed to save activity: %s", exc)
            return None
        return activity

    def _loop(self) -> None:
        while self._running.is_set():
            self.poll_once()
            self._stop_requested.wait(self.config.poll_interval_secs)

    def start(self) -> threading.Thread:
        """Start polling on a daemon thread and return that thread."""
        self._stop_requested.clear()
        self._running.set()
        thread = threading.Thread(target=self._loop, name="foxus-tracker", daemon=True)
        thread.start()
        return thread

    def stop(self) -> None:
        """Ask the polling thread to finish."""
        self._running.clear()
        self._stop_requested.set()

    def is_running(self) -> bool:
        return self._running.is_set()