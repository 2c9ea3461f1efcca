"""Database package."""

from creator_feed.db.base import Base, close_db, get_engine, init_db
from creator_feed.db.session import get_async_session, get_session_factory

__all__ = ["Base", "close_db", "get_engine", "init_db", "get_async_session", "get_session_factory"]
