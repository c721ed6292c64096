"""Session management package."""
from namecast.sessions.manager import SessionManager
from namecast.sessions.models import Session
from namecast.sessions.storage import InMemorySessionStore, SessionStore

__all__ = ["SessionManager", "Session", "SessionStore", "InMemorySessionStore"]
