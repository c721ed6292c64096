"""Session manager for name generation sessions."""

import shutil
import threading
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from namecast.exceptions import SessionBusyError, SessionNotFoundError
from namecast.logger import Logger
from namecast.sessions.models import Session
from namecast.sessions.storage import SessionStore


class SessionManager:
    """Owns session lifecycle and every filesystem path a session creates."""

    def __init__(self, session_store: SessionStore, logger: Logger) -> None:
        """
        Initialize the session manager.

        Args:
            session_store: Storage for sessions (in-process map by default)
            logger: Logger instance
        """
        self.session_store = session_store
        self.logger = logger
        self._mutex = threading.RLock()
        self._busy: Dict[str, threading.Lock] = {}

    def create_session(self) -> str:
        """
        Create an empty session.

        Returns:
            The new session identifier
        """
        now = datetime.now(timezone.utc)
        session = Session(
            session_id=str(uuid.uuid4()),
            created_at=now.isoformat(),
            created_ts=now.timestamp(),
        )
        self.session_store.save_session(session)
        self.logger.info("Created session", session_id=session.session_id)
        return session.session_id

    def get_session(self, session_id: str) -> Optional[Session]:
        """
        Retrieve a session.

        Returns:
            Session or None if not found
        """
        if not session_id:
            return None
        return self.session_store.load_session(session_id)

    def require_session(self, session_id: str) -> Session:
        """
        Retrieve a session or fail.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def attach_upload(
        self,
        session_id: str,
        template_path: Union[str, Path],
        list_path: Union[str, Path],
        list_extension: Optional[str] = None,
    ) -> Session:
        """Record the uploaded files and register both for cleanup right away."""
        with self._mutex:
            session = self.require_session(session_id)
            session.template_path = str(template_path)
            session.list_path = str(list_path)
            session.list_extension = list_extension
            for path in (session.template_path, session.list_path):
                if path not in session.cleanup_paths:
                    session.cleanup_paths.append(path)
            self.session_store.save_session(session)
        self.logger.debug(
            "Upload attached", session_id=session_id, list_extension=list_extension
        )
        return session

    def set_names(self, session_id: str, names: List[str]) -> Session:
        with self._mutex:
            session = self.require_session(session_id)
            session.names = list(names)
            self.session_store.save_session(session)
        self.logger.info("Names stored", session_id=session_id, names_total=len(names))
        return session

    def register_cleanup_path(self, session_id: str, path: Union[str, Path]) -> None:
        """
        Register a file or directory to remove when the session is destroyed.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        path_str = str(path)
        with self._mutex:
            session = self.require_session(session_id)
            if path_str in session.cleanup_paths:
                return
            session.cleanup_paths.append(path_str)
            self.session_store.save_session(session)
        self.logger.debug("Cleanup path registered", session_id=session_id, path=path_str)

    def destroy_session(self, session_id: str) -> bool:
        """
        Remove every registered path (best effort) and evict the session.

        Removal failures are logged and ignored. Calling this twice is safe.

        Returns:
            True if a session was destroyed, False if it did not exist
        """
        with self._mutex:
            session = self.get_session(session_id)
            if session is None:
                return False
            self.session_store.delete_session(session_id)
            self._busy.pop(session_id, None)

        removed = 0
        for path_str in session.cleanup_paths:
            if self._remove_path(Path(path_str), session_id):
                removed += 1

        self.logger.info(
            "Destroyed session",
            session_id=session_id,
            paths_registered=len(session.cleanup_paths),
            paths_removed=removed,
        )
        return True

    def acquire_session(self, session_id: str) -> Session:
        """
        Take exclusive use of a session until ``release_session``.

        Returns:
            The current session state

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionBusyError: If another call already holds the session
        """
        with self._mutex:
            session = self.require_session(session_id)
            lock = self._busy.setdefault(session_id, threading.Lock())
        if not lock.acquire(blocking=False):
            self.logger.warning("Session busy, rejecting concurrent call", session_id=session_id)
            raise SessionBusyError(session_id)
        return session

    def release_session(self, session_id: str) -> None:
        """Give up exclusive use. No-op once the session has been destroyed."""
        with self._mutex:
            lock = self._busy.get(session_id)
        if lock is not None and lock.locked():
            lock.release()

    @contextmanager
    def session_lock(self, session_id: str) -> Iterator[Session]:
        """
        Hold exclusive use of a session for a preview or generation.

        Yields:
            The current session state

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionBusyError: If another call already holds the session
        """
        session = self.acquire_session(session_id)
        try:
            yield session
        finally:
            self.release_session(session_id)

    def is_busy(self, session_id: str) -> bool:
        lock = self._busy.get(session_id)
        return lock is not None and lock.locked()

    def list_sessions(self) -> List[Session]:
        sessions = []
        for session_id in self.session_store.list_sessions():
            session = self.get_session(session_id)
            if session is not None:
                sessions.append(session)
        return sessions

    def purge_expired(self, max_age_seconds: float, now: Optional[float] = None) -> int:
        """
        Destroy sessions created more than ``max_age_seconds`` ago.

        Sessions with a call in flight are left for the next cycle.

        Returns:
            Number of sessions destroyed
        """
        current = time.time() if now is None else now
        purged = 0
        for session in self.list_sessions():
            if current - session.created_ts < max_age_seconds:
                continue
            if self.is_busy(session.session_id):
                continue
            if self.destroy_session(session.session_id):
                purged += 1
        if purged:
            self.logger.info("Expired sessions purged", purged=purged, max_age_seconds=max_age_seconds)
        return purged

    def _remove_path(self, path: Path, session_id: str) -> bool:
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            elif path.exists() or path.is_symlink():
                path.unlink()
            else:
                return False
            return True
        except OSError as e:
            self.logger.debug(
                "Cleanup of path failed, ignoring",
                session_id=session_id,
                path=str(path),
                error=str(e),
            )
            return False
