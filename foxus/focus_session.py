"""Focus sessions with a distraction time budget."""

from __future__ import annotations

import sqlite3
import time
from dataclasses import dataclass


class UnsavedSessionError(RuntimeError):
    """Raised when a session that was never saved is updated."""


def current_timestamp() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())


@dataclass
class FocusSession:
    """A focus session; it is active while ``ended_at`` is None."""

    started_at: int
    distraction_budget: int
    ended_at: int | None = None
    scheduled: bool = False
    distraction_used: int = 0
    id: int | None = None

    @classmethod
    def new(cls, distraction_budget_secs: int, scheduled: bool) -> FocusSession:
        """Create an unsaved session starting now."""
        return cls(
            started_at=current_timestamp(),
            distraction_budget=distraction_budget_secs,
            scheduled=scheduled,
        )

    def save(self, conn: sqlite3.Connection) -> None:
        """Insert the session and record its new row id."""
        cursor = conn.execute(
            "INSERT INTO focus_sessions "
            "(started_at, ended_at, scheduled, distraction_budget, distraction_used) "
            "VALUES (?, ?, ?, ?, ?)",
            (
                self.started_at,
                self.ended_at,
                int(self.scheduled),
                self.distraction_budget,
                self.distraction_used,
            ),
        )
        self.id = cursor.lastrowid

    @classmethod
    def find_active(cls, conn: sqlite3.Connection) -> FocusSession | None:
        """Return the most recently started unended session, if any."""
        row = conn.execute(
            "SELECT id, started_at, ended_at, scheduled, distraction_budget, distraction_used "
            "FROM focus_sessions WHERE ended_at IS NULL "
            "ORDER BY started_at DESC LIMIT 1"
        ).fetchone()
        if row is None:
            return None
        session_id, started_at, ended_at, scheduled, budget, used = row
        return cls(
            id=session_id,
            started_at=started_at,
            ended_at=ended_at,
            scheduled=scheduled != 0,
            distraction_budget=budget,
            distraction_used=used,
        )

    def _require_id(self, action: str) -> int:
        if self.id is None:
            raise UnsavedSessionError(f"Cannot {action} unsaved session - call save() first")
        return self.id

    def end(self, conn: sqlite3.Connection) -> None:
        """Mark the session as ended now."""
        session_id = self._require_id("end")
        now = current_timestamp()
        self.ended_at = now
        conn.execute(
            "UPDATE focus_sessions SET ended_at = ? WHERE id = ?", (now, session_id)
        )

    def add_distraction_time(self, conn: sqlite3.Connection, secs: int) -> None:
        """Add ``secs`` to the distraction time used."""
        session_id = self._require_id("update")
        self.distraction_used += secs
        conn.execute(
            "UPDATE focus_sessions SET distraction_used = ? WHERE id = ?",
            (self.distraction_used, session_id),
        )

    def budget_remaining(self) -> int:
        """Return the unused distraction budget, never below zero."""
        return max(self.distraction_budget - self.distraction_used, 0)

    def is_budget_exhausted(self) -> bool:
        return self.distraction_used >= self.distraction_budget