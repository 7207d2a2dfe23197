"""
Auth session held for one browser.

A ``SessionStore`` is loaded at the start of a request, handed to the API
client and to whatever route needs it, and written back at the end of the
request by ``SessionRepository`` only if something changed. Only the
sign-in and registration paths call ``set``; ``clear`` is called on logout
and when the backend rejects our token.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from app.platform.config import settings
from app.platform.logger import get_logger

logger = get_logger("session")


class Role(str, Enum):
    WORKER = "worker"
    EMPLOYER = "employer"
    ADMIN = "admin"


ROLE_HOME = {
    Role.WORKER: "/dashboard",
    Role.EMPLOYER: "/employer",
    Role.ADMIN: "/admin",
}


class AuthSession(BaseModel):
    token: str = Field(..., min_length=1)
    role: Role


class SessionStore:
    def __init__(self, session: Optional[AuthSession] = None):
        self._session = session
        self.changed = False

    def set(self, token: str, role: Role) -> AuthSession:
        self._session = AuthSession(token=token, role=role)
        self.changed = True
        return self._session

    def get(self) -> Optional[AuthSession]:
        return self._session

    def clear(self) -> None:
        if self._session is not None:
            self.changed = True
        self._session = None

    @property
    def token(self) -> Optional[str]:
        return self._session.token if self._session else None

    @property
    def role(self) -> Optional[Role]:
        return self._session.role if self._session else None


class SessionRepository:
    KEY_PREFIX = "session:"

    def __init__(self, store, ttl: int = None):
        self.store = store
        self.ttl = ttl or settings.SESSION_TTL_SECONDS

    def _key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    async def load(self, session_id: str) -> SessionStore:
        raw = await self.store.get(self._key(session_id))
        if not raw:
            return SessionStore()

        try:
            return SessionStore(AuthSession.model_validate_json(raw))
        except ValidationError:
            logger.warning(f"Discarding unreadable auth session for browser {session_id[:8]}")
            await self.store.delete(self._key(session_id))
            return SessionStore()

    async def save(self, session_id: str, session_store: SessionStore) -> None:
        if not session_store.changed:
            return

        current = session_store.get()
        if current is None:
            await self.store.delete(self._key(session_id))
        else:
            await self.store.set(self._key(session_id), current.model_dump_json(), ex=self.ttl)
        session_store.changed = False
