"""Persistence layer for generation sessions."""

from namecast.sessions.storage.base import SessionStore
from namecast.sessions.storage.memory import InMemorySessionStore

__all__ = ["SessionStore", "InMemorySessionStore"]
