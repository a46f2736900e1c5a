"""Focus mode: session control, distraction budget and blocked domains."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field

from foxus.db import Database
from foxus.focus_session import FocusSession, current_timestamp


@dataclass
class FocusState:
    """A snapshot of focus mode."""

    active: bool
    budget_remaining: int
    blocked_domains: list[str] = field(default_factory=list)
    session_duration_secs: int | None = None


def _strip_wildcard_prefix(pattern: str) -> str:
    while pattern.startswith("*."):
        pattern = pattern[2:]
    return pattern


class FocusManager:
    """Starts and ends focus sessions stored in a shared database."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def start_session(self, distraction_budget_secs: int) -> FocusSession:
        """End any active session and start a new one with the given budget."""
        with self._db.lock:
            conn = self._db.connection
            existing = FocusSession.find_active(conn)
            if existing is not None:
                existing.end(conn)
            session = FocusSession.new(distraction_budget_secs, False)
            session.save(conn)
            return session

    def end_session(self) -> FocusSession | None:
        """End the active session and return it, or None if there was none."""
        with self._db.lock:
            conn = self._db.connection
            session = FocusSession.find_active(conn)
            if session is not None:
                session.end(conn)
            return session

    def get_state(self) -> FocusState:
        with self._db.lock:
            conn = self._db.connection
            session = FocusSession.find_active(conn)
            blocked_domains = self._blocked_domains(conn)

        if session is None:
            return FocusState(False, 0, blocked_domains, None)
        duration = max(current_timestamp() - session.started_at, 0)
        return FocusState(True, session.budget_remaining(), blocked_domains, duration)

    def use_distraction_time(self, secs: int) -> int | None:
        """Spend ``secs`` of the budget; return what remains, or None if inactive."""
        with self._db.lock:
            conn = self._db.connection
            session = FocusSession.find_active(conn)
            if session is None:
                return None
            session.add_distraction_time(conn, secs)
            return session.budget_remaining()

    def is_domain_blocked(self, domain: str) -> bool:
        state = self.get_state()
        if not state.active:
            return False
        return any(
            domain.endswith(blocked) or domain == _strip_wildcard_prefix(blocked)
            for blocked in state.blocked_domains
        )

    @staticmethod
    def _blocked_domains(conn: sqlite3.Connection) -> list[str]:
        rows = conn.execute(
            "SELECT r.pattern FROM rules r "
            "JOIN categories c ON r.category_id = c.id "
            "WHERE r.match_type = 'domain' AND c.productivity < 0"
        )
        return [pattern for (pattern,) in rows]