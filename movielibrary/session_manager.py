"""
Session Manager for Movie Library.
Each browser session gets its own seeded catalog, draft and filter.
"""
import os
import uuid
from datetime import datetime, timedelta
from typing import Dict, Optional
import threading

from movielibrary.catalog import CatalogStore
from movielibrary.schemas import DraftMovie, FilterCriteria

SESSION_TIMEOUT_MINUTES = int(os.getenv("SESSION_TIMEOUT_MINUTES", "60"))


class SessionData:
    """State owned by a single browser session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.catalog = CatalogStore.seeded()
        self.draft = DraftMovie()
        self.criteria = FilterCriteria()
        self.created_at = datetime.now()
        self.last_accessed = datetime.now()

    def touch(self):
        self.last_accessed = datetime.now()

    def set_criteria(self, criteria: FilterCriteria):
        """Replace the current filter criteria."""
        self.criteria = criteria
        self.touch()


class SessionManager:
    """Manages per-session catalogs for the Movie Library application."""

    def __init__(self, session_timeout_minutes: int = SESSION_TIMEOUT_MINUTES):
        self._sessions: Dict[str, SessionData] = {}
        self._lock = threading.Lock()
        self.session_timeout = timedelta(minutes=session_timeout_minutes)

    def create_session(self) -> str:
        """Create a new session and return the session ID."""
        session_id = str(uuid.uuid4())
        with self._lock:
            self._sessions[session_id] = SessionData(session_id)
        return session_id

    def _is_expired(self, session: SessionData, now: datetime) -> bool:
        return now - session.last_accessed > self.session_timeout

    def get_session(self, session_id: str) -> Optional[SessionData]:
        """Get session data by ID, dropping it if it has expired."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session:
                now = datetime.now()
                if self._is_expired(session, now):
                    del self._sessions[session_id]
                    return None
                session.last_accessed = now
            return session

    def peek_session(self, session_id: str) -> Optional[SessionData]:
        """Get session data without refreshing its last-accessed time."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session and self._is_expired(session, datetime.now()):
                return None
            return session

    def get_or_create_session(self, session_id: Optional[str] = None) -> tuple[str, SessionData]:
        """
        Get existing session or create a new one.

        Expired sessions are swept before a new one is registered.
        """
        if session_id:
            session = self.get_session(session_id)
            if session:
                return session_id, session

        self.cleanup_expired_sessions()
        new_session_id = self.create_session()
        with self._lock:
            return new_session_id, self._sessions[new_session_id]

    def delete_session(self, session_id: str) -> bool:
        """Delete a session."""
        with self._lock:
            if session_id in self._sessions:
                del self._sessions[session_id]
                return True
            return False

    def cleanup_expired_sessions(self) -> int:
        """Remove expired sessions and return how many were dropped."""
        with self._lock:
            now = datetime.now()
            expired = [
                sid for sid, session in self._sessions.items()
                if self._is_expired(session, now)
            ]
            for sid in expired:
                del self._sessions[sid]
            return len(expired)

    def get_active_session_count(self) -> int:
        """Get count of active sessions."""
        with self._lock:
            return len(self._sessions)


# Global session manager instance
_session_manager: Optional[SessionManager] = None


def get_session_manager() -> SessionManager:
    """Get or create the global session manager instance."""
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager()
    return _session_manager


def reset_session_manager():
    """Drop the global session manager (used by tests)."""
    global _session_manager
    _session_manager = None
