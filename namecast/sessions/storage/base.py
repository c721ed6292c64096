"""Base session store interface.

Defines the abstract interface that all session store implementations must
follow. The manager only talks to this interface, so a store backed by an
external cache can replace the in-process one without touching call sites.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from namecast.sessions.models import Session


class SessionStore(ABC):
    """Abstract base class for session storage implementations"""

    @abstractmethod
    def save_session(self, session: Session) -> None:
        """
        Insert or replace a session

        Args:
            session: Session to store
        """
        pass

    @abstractmethod
    def load_session(self, session_id: str) -> Optional[Session]:
        """
        Retrieve a session by identifier

        Args:
            session_id: Session identifier

        Returns:
            Session or None if not found
        """
        pass

    @abstractmethod
    def delete_session(self, session_id: str) -> bool:
        """
        Evict a session

        Returns:
            True if a session was removed, False if it did not exist
        """
        pass

    @abstractmethod
    def list_sessions(self) -> List[str]:
        """List all stored session identifiers"""
        pass
