"""Information about the foreground window and user idle time."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ActiveWindow:
    """The currently focused window."""

    app_name: str = ""
    window_title: str = ""
    # Bundle identifier on systems that have one, e.g. "com.apple.Safari".
    bundle_id: str | None = None


class PlatformTracker(ABC):
    """Reports the active window and how long the user has been idle."""

    @abstractmethod
    def get_active_window(self) -> ActiveWindow | None:
        """Return the focused window, or None if it cannot be determined."""

    @abstractmethod
    def get_idle_time_secs(self) -> int:
        """Return whole seconds since the last user input."""


class StubTracker(PlatformTracker):
    """A tracker for development that always reports the same window."""

    def get_active_window(self) -> ActiveWindow | None:
        return ActiveWindow(app_name="TestApp", window_title="Test Window")

    def get_idle_time_secs(self) -> int:
        return 0