import time

import pytest

from foxus.activity import Activity
from foxus.categorizer import Categorizer
from foxus.category import Category
from foxus.db import Database, run_migrations
from foxus.platform import ActiveWindow, PlatformTracker
from foxus.tracker import TrackerConfig, TrackerService


class FakePlatform(PlatformTracker):
    def __init__(self, window=None, idle=0):
        self.window = window
        self.idle = idle

    def get_active_window(self):
        return self.window

    def get_idle_time_secs(self):
        return self.idle


@pytest.fixture
def db(tmp_path):
    database = Database(tmp_path / "test.db")
    run_migrations(database.connection)
    yield database
    database.close()


@pytest.fixture
def categorizer(db):
    return Categorizer(db.connection)


def _category_id(db, name):
    return next(c.id for c in Category.find_all(db.connection) if c.name == name)


def test_default_config():
    config = TrackerConfig()
    assert config.poll_interval_secs == 5
    assert config.idle_threshold_secs == 120


def test_tracker_starts_and_stops(db, categorizer):
    config = TrackerConfig(poll_interval_secs=1, idle_threshold_secs=120)
    tracker = TrackerService(db, categorizer, config)

    assert not tracker.is_running()

    thread = tracker.start()
    assert tracker.is_running()

    time.sleep(0.1)

    tracker.stop()
    thread.join(timeout=5)

    assert not thread.is_alive()
    assert not tracker.is_running()


def test_tracker_saves_activities_to_db(db, categorizer):
    platform = FakePlatform(ActiveWindow("TestApp", "Test Window"))
    tracker = TrackerService(db, categorizer, TrackerConfig(), platform)

    saved = tracker.poll_once()

    activities = Activity.find_in_range(db.connection, 0, 2**63 - 1)
    assert len(activities) == 1
    stored = activities[0]
    assert stored.source == "app"
    assert stored.app_name == "TestApp"
    assert stored.window_title == "Test Window"
    assert stored.category_id == categorizer.categorize_app("TestApp", "Test Window")
    assert stored.duration_secs == 5
    assert saved.id == stored.id


def test_poll_categorizes_with_rules(db, categorizer):
    platform = FakePlatform(ActiveWindow("Visual Studio Code", "main.rs"))
    tracker = TrackerService(db, categorizer, TrackerConfig(), platform)

    activity = tracker.poll_once()

    assert activity.category_id == _category_id(db, "Coding")


def test_poll_skips_when_idle(db, categorizer):
    platform = FakePlatform(ActiveWindow("TestApp", "Test Window"), idle=120)
    tracker = TrackerService(db, categorizer, TrackerConfig(idle_threshold_secs=120), platform)

    assert tracker.poll_once() is None
    assert Activity.find_in_range(db.connection, 0, 2**63 - 1) == []


def test_poll_skips_without_window(db, categorizer):
    tracker = TrackerService(db, categorizer, TrackerConfig(), FakePlatform(None))

    assert tracker.poll_once() is None
    assert Activity.find_in_range(db.connection, 0, 2**63 - 1) == []


def test_duration_follows_poll_interval(db, categorizer):
    platform = FakePlatform(ActiveWindow("TestApp", "Test Window"))
    tracker = TrackerService(db, categorizer, TrackerConfig(poll_interval_secs=7), platform)

    activity = tracker.poll_once()

    assert activity.duration_secs == 7


def test_running_thread_records_activity(db, categorizer):
    platform = FakePlatform(ActiveWindow("TestApp", "Test Window"))
    tracker = TrackerService(db, categorizer, TrackerConfig(poll_interval_secs=1), platform)

    thread = tracker.start()
    deadline = time.monotonic() + 5
    while time.monotonic() < deadline:
        with db.lock:
            found = Activity.find_in_range(db.connection, 0, 2**63 - 1)
        if found:
            break
        time.sleep(0.02)
    tracker.stop()
    thread.join(timeout=5)

    assert found[0].app_name == "TestApp"
    assert not thread.is_alive()