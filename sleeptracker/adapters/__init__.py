"""Adapter package for storage implementations.

Purpose:
    Collect concrete implementations for domain ports (SQLite nights table,
    in-memory test double and the JSON settings file).

Dependencies:
    ``session_store_sql`` depends on ``sqlmodel``/``sqlalchemy``; the other
    submodules use the filesystem and the standard library only.

Call context:
    Imported by ``sleeptracker.app.main`` for runtime wiring and by tests.
"""
