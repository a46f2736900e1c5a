"""Recorded spans of app or browser activity."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

_COLUMNS = (
    "id, timestamp, duration_secs, source, app_name, window_title, url, domain, category_id"
)


@dataclass
class Activity:
    """One tracked span; ``id`` is set once the activity is saved."""

    timestamp: int
    duration_secs: int
    source: str
    app_name: str | None = None
    window_title: str | None = None
    url: str | None = None
    domain: str | None = None
    category_id: int | None = None
    id: int | None = None

    def save(self, conn: sqlite3.Connection) -> None:
        """Insert the activity and record its new row id."""
        cursor = conn.execute(
            "INSERT INTO activities "
            "(timestamp, duration_secs, source, app_name, window_title, url, domain, category_id) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                self.timestamp,
                self.duration_secs,
                self.source,
                self.app_name,
                self.window_title,
                self.url,
                self.domain,
                self.category_id,
            ),
        )
        self.id = cursor.lastrowid

    @classmethod
    def find_in_range(
        cls, conn: sqlite3.Connection, start: int, end: int
    ) -> list[Activity]:
        """Return activities with ``start <= timestamp < end``, oldest first."""
        rows = conn.execute(
            f"SELECT {_COLUMNS} FROM activities "
            "WHERE timestamp >= ? AND timestamp < ? ORDER BY timestamp",
            (start, end),
        )
        return [
            cls(
                id=row_id,
                timestamp=timestamp,
                duration_secs=duration_secs,
                source=source,
                app_name=app_name,
                window_title=window_title,
                url=url,
                domain=domain,
                category_id=category_id,
            )
            for (
                row_id,
                timestamp,
                duration_secs,
                source,
                app_name,
                window_title,
                url,
                domain,
                category_id,
            ) in rows
        ]

    @classmethod
    def total_duration_by_category(
        cls, conn: sqlite3.Connection, start: int, end: int
    ) -> list[tuple[int, int]]:
        """Return ``(category_id, total_secs)`` pairs for categorised activities in range."""
        rows = conn.execute(
            "SELECT category_id, SUM(duration_secs) AS total FROM activities "
            "WHERE timestamp >= ? AND timestamp < ? AND category_id IS NOT NULL "
            "GROUP BY category_id",
            (start, end),
        )
        return [(category_id, total) for category_id, total in rows]