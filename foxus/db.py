"""SQLite storage: connection wrapper, schema and default seed data."""

from __future__ import annotations

import os
import sqlite3
import threading

_TABLES: dict[str, tuple[str, ...]] = {
    "categories": (
        "id INTEGER PRIMARY KEY",
        "name TEXT NOT NULL UNIQUE",
        "productivity INTEGER NOT NULL",
    ),
    "rules": (
        "id INTEGER PRIMARY KEY",
        "pattern TEXT NOT NULL",
        "match_type TEXT NOT NULL",
        "category_id INTEGER NOT NULL REFERENCES categories(id) ON DELETE CASCADE",
        "priority INTEGER DEFAULT 0",
    ),
    "activities": (
        "id INTEGER PRIMARY KEY",
        "timestamp INTEGER NOT NULL",
        "duration_secs INTEGER NOT NULL",
        "source TEXT NOT NULL",
        "app_name TEXT",
        "window_title TEXT",
        "url TEXT",
        "domain TEXT",
        "category_id INTEGER REFERENCES categories(id) ON DELETE SET NULL",
    ),
    "focus_sessions": (
        "id INTEGER PRIMARY KEY",
        "started_at INTEGER NOT NULL",
        "ended_at INTEGER",
        "scheduled INTEGER DEFAULT 0",
        "distraction_budget INTEGER NOT NULL",
        "distraction_used INTEGER DEFAULT 0",
    ),
    "focus_schedules": (
        "id INTEGER PRIMARY KEY",
        "days_of_week TEXT NOT NULL",
        "start_time TEXT NOT NULL",
        "end_time TEXT NOT NULL",
        "distraction_budget INTEGER NOT NULL",
        "enabled INTEGER DEFAULT 1",
    ),
}

# (index name, table, column, partial-index condition)
_INDEXES: tuple[tuple[str, str, str, str | None], ...] = (
    ("idx_activities_timestamp", "activities", "timestamp", None),
    ("idx_activities_category", "activities", "category_id", None),
    ("idx_focus_sessions_active", "focus_sessions", "ended_at", "ended_at IS NULL"),
    ("idx_focus_sessions_started_at", "focus_sessions", "started_at", None),
    ("idx_rules_category", "rules", "category_id", None),
)


def _build_schema() -> str:
    statements = [
        f"CREATE TABLE IF NOT EXISTS {table} ({', '.join(columns)});"
        for table, columns in _TABLES.items()
    ]
    for name, table, column, condition in _INDEXES:
        where = f" WHERE {condition}" if condition else ""
        statements.append(
            f"CREATE INDEX IF NOT EXISTS {name} ON {table}({column}){where};"
        )
    return "\n".join(statements)


SCHEMA = _build_schema()

_CATEGORY_PRODUCTIVITY: dict[str, int] = {
    "Coding": 1,
    "Communication": 0,
    "Entertainment": -1,
    "Reference": 1,
    "Uncategorized": 0,
}

DEFAULT_CATEGORIES: tuple[tuple[str, int], ...] = tuple(_CATEGORY_PRODUCTIVITY.items())

# Grouped by category and match type; the flattened order is the insertion order.
_DEFAULT_PATTERNS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    (
        "Coding",
        "app",
        ("code", "visual studio", "xcode", "intellij", "webstorm", "pycharm",
         "terminal", "iterm"),
    ),
    ("Coding", "domain", ("github.com", "gitlab.com")),
    ("Reference", "domain", ("stackoverflow.com", "docs.rs")),
    ("Communication", "app", ("slack", "discord", "mail", "outlook", "teams", "zoom")),
    (
        "Entertainment",
        "domain",
        ("youtube.com", "netflix.com", "twitter.com", "x.com", "reddit.com",
         "facebook.com", "instagram.com", "tiktok.com", "twitch.tv"),
    ),
)

DEFAULT_RULES: tuple[tuple[str, str, str], ...] = tuple(
    (pattern, match_type, category)
    for category, match_type, patterns in _DEFAULT_PATTERNS
    for pattern in patterns
)

DEFAULT_RULE_PRIORITY = 10


class Database:
    """An open SQLite database with a lock for sharing between threads."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        self.connection = sqlite3.connect(
            self.path, isolation_level=None, check_same_thread=False
        )
        self.lock = threading.RLock()

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def run_migrations(conn: sqlite3.Connection) -> None:
    """Create the schema and seed default categories and rules if empty."""
    conn.executescript(SCHEMA)
    _seed_default_categories(conn)
    _seed_default_rules(conn)


def _count(conn: sqlite3.Connection, table: str) -> int:
    (count,) = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
    return count


def _seed_default_categories(conn: sqlite3.Connection) -> None:
    if _count(conn, "categories"):
        return
    conn.executemany(
        "INSERT INTO categories (name, productivity) VALUES (?, ?)",
        DEFAULT_CATEGORIES,
    )


def _seed_default_rules(conn: sqlite3.Connection) -> None:
    if _count(conn, "rules"):
        return
    category_ids = dict(conn.execute("SELECT name, id FROM categories"))
    conn.executemany(
        "INSERT INTO rules (pattern, match_type, category_id, priority) "
        "VALUES (?, ?, ?, ?)",
        (
            (pattern, match_type, category_ids[name], DEFAULT_RULE_PRIORITY)
            for pattern, match_type, name in DEFAULT_RULES
            if name in category_ids
        ),
    )