"""In-process session store."""

import threading
from typing import Dict, List, Optional

from namecast.logger import Logger
from namecast.sessions.models import Session
from namecast.sessions.storage.base import SessionStore


class InMemorySessionStore(SessionStore):
    """Dict-backed store guarded by a lock.

    Sessions live as long as the process; stored copies are returned so that
    callers only change state through ``save_session``.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()
        self.logger = logger

    def save_session(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.session_id] = session.model_copy(deep=True)
        if self.logger:
            self.logger.debug("Session stored", session_id=session.session_id)

    def load_session(self, session_id: str) -> Optional[Session]:
        with self._lock:
            session = self._sessions.get(session_id)
            return session.model_copy(deep=True) if session is not None else None

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed and self.logger:
            self.logger.debug("Session evicted", session_id=session_id)
        return removed

    def list_sessions(self) -> List[str]:
        with self._lock:
            return list(self._sessions.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
