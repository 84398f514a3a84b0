"""
Login sessions for the presentation layer.
"""

from dataclasses import dataclass
from datetime import datetime, timezone, timedelta
from typing import Dict, Optional
import threading
import uuid


@dataclass(frozen=True)
class Session:
    """An open login for one account"""
    id: str
    account_id: str
    created_at: datetime
    expires_at: datetime

    @property
    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at


class SessionStore:
    """In-memory session registry with expiry"""

    def __init__(self, timeout: timedelta = timedelta(minutes=30)):
        self.timeout = timeout
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def open(self, account_id: str) -> Session:
        now = datetime.now(timezone.utc)
        session = Session(
            id=str(uuid.uuid4()),
            account_id=account_id,
            created_at=now,
            expires_at=now + self.timeout
        )
        with self._lock:
            self._drop_expired(now)
            self._sessions[session.id] = session
        return session

    def purge_expired(self) -> int:
        """Remove every expired session, returning how many were dropped"""
        with self._lock:
            return self._drop_expired(datetime.now(timezone.utc))

    def _drop_expired(self, now: datetime) -> int:
        expired = [sid for sid, s in self._sessions.items() if now >= s.expires_at]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def get(self, session_id: str) -> Optional[Session]:
        """Get an open session; expired sessions are dropped"""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_expired:
                del self._sessions[session_id]
                return None
            return session

    def close(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def close_all_for(self, account_id: str) -> int:
        """Close every session of an account, returning how many were open"""
        with self._lock:
            doomed = [sid for sid, s in self._sessions.items() if s.account_id == account_id]
            for sid in doomed:
                del self._sessions[sid]
            return len(doomed)

    def __len__(self) -> int:
        return len(self._sessions)
