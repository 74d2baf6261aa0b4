"""In-memory registry of game sessions."""
import logging
import uuid
from collections import OrderedDict
from typing import Optional

from ..config import get_settings
from .exceptions import SessionNotFoundError
from .session import GameSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Keeps live sessions by id, evicting the oldest past ``max_sessions``."""

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions if max_sessions is not None else get_settings().max_sessions
        self._sessions: "OrderedDict[str, GameSession]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self, **kwargs) -> GameSession:
        """Create and register a session. Keyword arguments go to GameSession."""
        session = GameSession(session_id=uuid.uuid4().hex, **kwargs)
        self._sessions[session.session_id] = session

        while len(self._sessions) > self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info(f"Evicted session {evicted_id}")

        return session

    def get(self, session_id: str) -> GameSession:
        """
        Look up a session.

        Raises:
            SessionNotFoundError: If no session has this id.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)


# Singleton instance
_store = None


def get_session_store() -> SessionStore:
    """Get or create session store singleton instance."""
    global _store
    if _store is None:
        _store = SessionStore()
    return _store
