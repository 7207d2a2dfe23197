from typing import AsyncGenerator

from fastapi import Depends

from app.features.auth.services.auth_api import AuthAPI
from app.features.auth.services.documents import DocumentService
from app.features.auth.services.registration_wizard import RegistrationWizard
from app.features.auth.services.verification_flow import FlowState, VerificationFlow
from app.features.auth.utils.flow_store import FlowRepository
from app.platform.api_client import ApiClient
from app.platform.cache.store import get_store
from app.platform.dependencies import get_api_client, get_session_id, get_session_store
from app.platform.exceptions import FlowStateError
from app.platform.session import SessionStore


def get_flow_repository() -> FlowRepository:
    return FlowRepository(get_store())


async def get_verification_flow(
    session_id: str = Depends(get_session_id),
    session_store: SessionStore = Depends(get_session_store),
    client: ApiClient = Depends(get_api_client),
    repository: FlowRepository = Depends(get_flow_repository),
) -> AsyncGenerator[VerificationFlow, None]:
    snapshot = await repository.load(session_id)
    flow = VerificationFlow(AuthAPI(client), DocumentService(client), session_store, snapshot)
    try:
        yield flow
    finally:
        await repository.save(session_id, flow.snapshot)


def get_registration_wizard(
    flow: VerificationFlow = Depends(get_verification_flow),
) -> RegistrationWizard:
    if flow.state != FlowState.REGISTERING:
        raise FlowStateError("No registration in progress. Please verify your phone number first.")
    return flow.wizard()
