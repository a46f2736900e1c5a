"""Commands exposed to the user interface: daily statistics and focus control."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field

from foxus.activity import Activity
from foxus.category import Category
from foxus.db import Database
from foxus.focus import FocusManager
from foxus.focus_session import current_timestamp

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
MAX_BUDGET_MINUTES = 24 * 60
TOP_APPS_LIMIT = 5

_STATS_ERROR = "Failed to load statistics"


class CommandError(Exception):
    """A command failed; the message is safe to show to the user."""


@dataclass(frozen=True)
class AppStat:
    """Time spent in one app today."""

    name: str
    duration_secs: int
    productivity: int


@dataclass(frozen=True)
class StatsResponse:
    """Today's time split by productivity, with the most used apps."""

    productive_secs: int
    neutral_secs: int
    distracting_secs: int
    top_apps: list[AppStat] = field(default_factory=list)


@dataclass(frozen=True)
class FocusStateResponse:
    """Focus mode as reported to the user interface."""

    active: bool
    budget_remaining: int
    session_duration_secs: int | None


def _top_apps(conn: sqlite3.Connection, start: int, end: int) -> list[AppStat]:
    rows = conn.execute(
        "SELECT app_name, SUM(duration_secs) AS total, c.productivity "
        "FROM activities a "
        "LEFT JOIN categories c ON a.category_id = c.id "
        "WHERE a.timestamp >= ? AND a.timestamp < ? AND a.app_name IS NOT NULL "
        "GROUP BY app_name "
        "ORDER BY total DESC "
        f"LIMIT {TOP_APPS_LIMIT}",
        (start, end),
    )
    return [
        AppStat(name=name, duration_secs=total, productivity=productivity or 0)
        for name, total, productivity in rows
    ]


def get_today_stats(db: Database) -> StatsResponse:
    """Summarise activity since midnight (UTC) today."""
    now = current_timestamp()
    today_start = now - now % SECONDS_PER_DAY

    try:
        with db.lock:
            conn = db.connection
            categories = {c.id: c.productivity for c in Category.find_all(conn)}
            totals = Activity.total_duration_by_category(conn, today_start, now)
            top_apps = _top_apps(conn, today_start, now)
    except sqlite3.Error as exc:
        logger.error("Failed to load statistics: %s", exc)
        raise CommandError(_STATS_ERROR) from exc

    by_productivity = {1: 0, 0: 0, -1: 0}
    for category_id, duration in totals:
        productivity = categories.get(category_id)
        if productivity in by_productivity:
            by_productivity[productivity] += duration

    return StatsResponse(
        productive_secs=by_productivity[1],
        neutral_secs=by_productivity[0],
        distracting_secs=by_productivity[-1],
        top_apps=top_apps,
    )


def get_focus_state(focus_manager: FocusManager) -> FocusStateResponse:
    """Report whether focus mode is on and how much budget is left."""
    try:
        state = focus_manager.get_state()
    except sqlite3.Error as exc:
        logger.error("Failed to get focus state: %s", exc)
        raise CommandError("Failed to load focus state") from exc
    return FocusStateResponse(
        active=state.active,
        budget_remaining=state.budget_remaining,
        session_duration_secs=state.session_duration_secs,
    )


def start_focus_session(focus_manager: FocusManager, budget_minutes: int) -> None:
    """Start a focus session with a distraction budget of up to 24 hours."""
    if budget_minutes <= 0:
        raise CommandError("Budget must be a positive number of minutes")
    if budget_minutes > MAX_BUDGET_MINUTES:
        raise CommandError(
            f"Budget cannot exceed {MAX_BUDGET_MINUTES} minutes (24 hours)"
        )
    try:
        focus_manager.start_session(budget_minutes * 60)
    except sqlite3.Error as exc:
        raise CommandError("Failed to start focus session") from exc


def end_focus_session(focus_manager: FocusManager) -> None:
    """End the active focus session, if there is one."""
    try:
        focus_manager.end_session()
    except sqlite3.Error as exc:
        logger.error("Failed to end focus session: %s", exc)
        raise CommandError("Failed to end focus session") from exc