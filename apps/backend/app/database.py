"""Database module - re-exports from casematch package."""

from casematch.database import async_session, engine, Base, init_db, get_db

__all__ = ["async_session", "engine", "Base", "init_db", "get_db"]
