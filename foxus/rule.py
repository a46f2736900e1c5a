"""Pattern rules that map apps, titles and domains to categories."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import Enum


class MatchType(str, Enum):
    """What a rule's pattern is matched against."""

    APP = "app"
    DOMAIN = "domain"
    TITLE = "title"

    @classmethod
    def from_str(cls, text: str) -> MatchType | None:
        """Return the match type stored as ``text``, or None if unknown."""
        try:
            return cls(text)
        except ValueError:
            return None


@dataclass(frozen=True)
class Rule:
    """A categorisation rule; higher priority rules are tried first."""

    id: int
    pattern: str
    match_type: MatchType
    category_id: int
    priority: int

    @classmethod
    def find_all(cls, conn: sqlite3.Connection) -> list[Rule]:
        rows = conn.execute(
            "SELECT id, pattern, match_type, category_id, priority "
            "FROM rules ORDER BY priority DESC"
        )
        return [
            cls(
                id=rule_id,
                pattern=pattern,
                # Unknown types fall back to app matching.
                match_type=MatchType.from_str(match_type) or MatchType.APP,
                category_id=category_id,
                priority=priority,
            )
            for rule_id, pattern, match_type, category_id, priority in rows
        ]

    @classmethod
    def create(
        cls,
        conn: sqlite3.Connection,
        pattern: str,
        match_type: MatchType,
        category_id: int,
        priority: int,
    ) -> Rule:
        cursor = conn.execute(
            "INSERT INTO rules (pattern, match_type, category_id, priority) "
            "VALUES (?, ?, ?, ?)",
            (pattern, match_type.value, category_id, priority),
        )
        return cls(cursor.lastrowid, pattern, match_type, category_id, priority)