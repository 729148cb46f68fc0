"""Work-item tracking, sessions, reports and agent tools over SQLite."""

__version__ = "0.1.0"