"""EverMind - assignment tracker with reminders and backend sync."""

__version__ = "0.1.0"
