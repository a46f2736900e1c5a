import sqlite3

import pytest

from foxus.categorizer import Categorizer, pattern_matches
from foxus.category import Category
from foxus.db import SCHEMA, Database, run_migrations
from foxus.rule import MatchType, Rule


@pytest.fixture
def conn(tmp_path):
    with Database(tmp_path / "test.db") as db:
        run_migrations(db.connection)
        yield db.connection


def _category(conn, name):
    return next(c for c in Category.find_all(conn) if c.name == name)


def test_categorize_with_no_rules_returns_default(conn):
    categorizer = Categorizer(conn)
    assert categorizer.categorize_app("SomeApp", None) == _category(conn, "Uncategorized").id


def test_categorize_app_with_rule(conn):
    coding = _category(conn, "Coding")
    Rule.create(conn, "code", MatchType.APP, coding.id, 10)
    categorizer = Categorizer(conn)
    assert categorizer.categorize_app("Visual Studio Code", None) == coding.id


def test_categorize_domain(conn):
    entertainment = _category(conn, "Entertainment")
    Rule.create(conn, "reddit.com", MatchType.DOMAIN, entertainment.id, 10)
    categorizer = Categorizer(conn)
    assert categorizer.categorize_url("reddit.com") == entertainment.id


def test_pattern_with_wildcard(conn):
    coding = _category(conn, "Coding")
    Rule.create(conn, "*.github.*", MatchType.DOMAIN, coding.id, 10)
    categorizer = Categorizer(conn)
    assert categorizer.categorize_url("www.github.com") == coding.id
    assert categorizer.categorize_url("gist.github.io") == coding.id


def test_pattern_matches_case_insensitive():
    assert pattern_matches("code", "Visual Studio CODE")
    assert pattern_matches("CODE", "visual studio code")


def test_pattern_matches_wildcard():
    assert pattern_matches("*.github.*", "www.github.com")
    assert pattern_matches("*git*", "github.com")
    assert not pattern_matches("*.github.*", "gitlab.com")


@pytest.mark.parametrize(
    "pattern, text, expected",
    [
        ("*", "anything", True),
        ("", "anything", True),
        ("a*b", "ba", False),
        ("a*b", "axxb", True),
        ("slack", "Discord", False),
    ],
)
def test_pattern_matches_edge_cases(pattern, text, expected):
    assert pattern_matches(pattern, text) is expected


def test_categorize_app_with_window_title_rule(conn):
    coding = _category(conn, "Coding")
    Rule.create(conn, "pull request", MatchType.TITLE, coding.id, 10)
    categorizer = Categorizer(conn)

    assert categorizer.categorize_app("Firefox", "Pull Request #123 - GitHub") == coding.id
    assert (
        categorizer.categorize_app("Firefox", "YouTube - Videos")
        == _category(conn, "Uncategorized").id
    )


def test_title_rule_ignored_without_title(conn):
    coding = _category(conn, "Coding")
    Rule.create(conn, "pull request", MatchType.TITLE, coding.id, 10)
    categorizer = Categorizer(conn)
    assert categorizer.categorize_app("Pull Request App", None) == _category(
        conn, "Uncategorized"
    ).id


def test_domain_rule_does_not_match_app(conn):
    categorizer = Categorizer(conn)
    assert categorizer.categorize_app("youtube.com", None) == _category(
        conn, "Uncategorized"
    ).id


def test_app_rule_does_not_match_domain(conn):
    categorizer = Categorizer(conn)
    assert categorizer.categorize_url("slack.example.com") == _category(
        conn, "Uncategorized"
    ).id


def test_reload_picks_up_new_rules(conn):
    categorizer = Categorizer(conn)
    uncategorized = _category(conn, "Uncategorized")
    assert categorizer.categorize_app("MyNewApp", None) == uncategorized.id

    coding = _category(conn, "Coding")
    Rule.create(conn, "mynewapp", MatchType.APP, coding.id, 10)

    categorizer.reload(conn)
    assert categorizer.categorize_app("MyNewApp", None) == coding.id


def test_higher_priority_rule_wins_when_both_match(conn):
    coding = _category(conn, "Coding")
    entertainment = _category(conn, "Entertainment")
    Rule.create(conn, "editor", MatchType.APP, entertainment.id, 5)
    Rule.create(conn, "fancy editor", MatchType.APP, coding.id, 20)

    categorizer = Categorizer(conn)
    assert categorizer.categorize_app("Fancy Editor Pro", None) == coding.id
    assert categorizer.categorize_app("Simple Editor", None) == entertainment.id


def test_rule_with_unknown_category_is_ignored(conn):
    Rule.create(conn, "orphanapp", MatchType.APP, 9999, 50)
    categorizer = Categorizer(conn)
    assert all(rule.pattern != "orphanapp" for rule in categorizer.rules)
    assert categorizer.categorize_app("OrphanApp", None) == _category(
        conn, "Uncategorized"
    ).id


def test_default_category_falls_back_to_one_without_uncategorized():
    conn = sqlite3.connect(":memory:")
    try:
        conn.executescript(SCHEMA)
        categorizer = Categorizer(conn)
        assert categorizer.categorize_app("Anything", None) == 1
        assert categorizer.categorize_url("example.com") == 1
    finally:
        conn.close()