"""Assigns categories to apps, window titles and domains using stored rules."""

from __future__ import annotations

import sqlite3

from foxus.category import Category
from foxus.rule import MatchType, Rule

_FALLBACK_CATEGORY_ID = 1
_DEFAULT_CATEGORY_NAME = "Uncategorized"


def pattern_matches(pattern: str, text: str) -> bool:
    """Case-insensitive match of ``pattern`` in ``text``.

    A pattern without ``*`` matches as a substring. With ``*`` the pieces
    between wildcards must appear in ``text`` in order.
    """
    pattern = pattern.lower()
    text = text.lower()
    if "*" not in pattern:
        return pattern in text
    pos = 0
    for part in pattern.split("*"):
        if not part:
            continue
        found = text.find(part, pos)
        if found < 0:
            return False
        pos = found + len(part)
    return True


class Categorizer:
    """Holds the rules in priority order and resolves category ids."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._load(conn)

    def _load(self, conn: sqlite3.Connection) -> None:
        categories = Category.find_all(conn)
        known_ids = {category.id for category in categories}
        self._rules: list[Rule] = [
            rule for rule in Rule.find_all(conn) if rule.category_id in known_ids
        ]
        self.default_category_id: int = next(
            (c.id for c in categories if c.name == _DEFAULT_CATEGORY_NAME),
            _FALLBACK_CATEGORY_ID,
        )

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def categorize_app(self, app_name: str, window_title: str | None = None) -> int:
        """Return the category for an app, checking app and title rules."""
        for rule in self._rules:
            if rule.match_type is MatchType.APP:
                matched = pattern_matches(rule.pattern, app_name)
            elif rule.match_type is MatchType.TITLE:
                matched = window_title is not None and pattern_matches(
                    rule.pattern, window_title
                )
            else:
                matched = False
            if matched:
                return rule.category_id
        return self.default_category_id

    def categorize_url(self, domain: str) -> int:
        """Return the category for a domain, checking domain rules only."""
        for rule in self._rules:
            if rule.match_type is MatchType.DOMAIN and pattern_matches(rule.pattern, domain):
                return rule.category_id
        return self.default_category_id

    def reload(self, conn: sqlite3.Connection) -> None:
        """Re-read rules and categories from the database."""
        self._load(conn)