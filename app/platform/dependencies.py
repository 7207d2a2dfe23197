from typing import AsyncGenerator, Optional

import httpx
from fastapi import Depends, HTTPException, Request, status

from app.platform.api_client import ApiClient
from app.platform.cache.store import get_store
from app.platform.session import AuthSession, Role, SessionRepository, SessionStore


def get_session_id(request: Request) -> str:
    return request.state.session_id


def get_api_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for backend calls; None means real network I/O."""
    return None


def get_session_repository() -> SessionRepository:
    return SessionRepository(get_store())


async def get_session_store(
    session_id: str = Depends(get_session_id),
    repository: SessionRepository = Depends(get_session_repository),
) -> AsyncGenerator[SessionStore, None]:
    session_store = await repository.load(session_id)
    try:
        yield session_store
    finally:
        # also runs when the request failed, so a cleared session sticks
        await repository.save(session_id, session_store)


def get_api_client(
    session_store: SessionStore = Depends(get_session_store),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_api_transport),
) -> ApiClient:
    return ApiClient(session_store, transport=transport)


def require_role(role: Role):
    def dependency(session_store: SessionStore = Depends(get_session_store)) -> AuthSession:
        current = session_store.get()
        if current is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Please sign in to continue",
            )
        if current.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This page is only available to {role.value} accounts",
            )
        return current

    return dependency
