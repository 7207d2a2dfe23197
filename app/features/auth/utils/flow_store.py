from pydantic import ValidationError

from app.features.auth.services.verification_flow import FlowSnapshot, FlowState
from app.platform.config import settings
from app.platform.logger import get_logger

logger = get_logger("flow_store")


class FlowRepository:
    """Keeps a browser's in-progress sign-in between requests."""

    KEY_PREFIX = "flow:"

    def __init__(self, store, ttl: int = None):
        self.store = store
        self.ttl = ttl or settings.SESSION_TTL_SECONDS

    def _key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    async def load(self, session_id: str) -> FlowSnapshot:
        raw = await self.store.get(self._key(session_id))
        if not raw:
            return FlowSnapshot()

        try:
            return FlowSnapshot.model_validate_json(raw)
        except ValidationError:
            logger.warning(f"Discarding unreadable flow snapshot for browser {session_id[:8]}")
            await self.store.delete(self._key(session_id))
            return FlowSnapshot()

    async def save(self, session_id: str, snapshot: FlowSnapshot) -> None:
        # a finished flow has nothing left to resume
        if snapshot.state == FlowState.DONE:
            await self.store.delete(self._key(session_id))
            return
        await self.store.set(self._key(session_id), snapshot.model_dump_json(), ex=self.ttl)

    async def clear(self, session_id: str) -> None:
        await self.store.delete(self._key(session_id))
