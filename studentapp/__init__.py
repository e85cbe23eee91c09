"""StudentApp: student record management (SQLite + FastAPI)."""

__version__ = "0.1.0"
