"""Local-first productivity tracking with a focus mode and a browser native-messaging host."""

__version__ = "0.1.0"