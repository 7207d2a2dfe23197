from fastapi import APIRouter, Depends, Query

from app.features.admin.schemas.verification import RejectionRequest, VerificationStatus
from app.features.admin.services.verification import VerificationService
from app.platform.api_client import ApiClient
from app.platform.dependencies import get_api_client
from app.platform.response import api_response
from app.platform.utils.display import status_badge

router = APIRouter(prefix="/verifications", tags=["Admin - Verifications"])


def get_verification_service(client: ApiClient = Depends(get_api_client)) -> VerificationService:
    return VerificationService(client)


@router.get(
    "",
    summary="List verifications by status",
)
async def list_verifications(
    status: VerificationStatus = Query("pending"),
    service: VerificationService = Depends(get_verification_service),
):
    verifications = await service.list_verifications(status)

    return api_response(
        data={
            "status": status,
            "verifications": [
                {**item.model_dump(mode="json", by_alias=True), "badge": status_badge(item.status)}
                for item in verifications
            ],
        },
        message="Verifications retrieved successfully",
    )


@router.post(
    "/{verification_id}/approve",
    summary="Approve a verification",
)
async def approve_verification(
    verification_id: str,
    service: VerificationService = Depends(get_verification_service),
):
    await service.approve(verification_id)

    return api_response(
        data={"id": verification_id, "status": "approved", "badge": status_badge("approved")},
        message="Verification approved",
    )


@router.post(
    "/{verification_id}/reject",
    summary="Reject a verification",
)
async def reject_verification(
    verification_id: str,
    body: RejectionRequest,
    service: VerificationService = Depends(get_verification_service),
):
    """A non-blank reason is required; it is checked before anything is sent."""
    await service.reject(verification_id, body)

    return api_response(
        data={"id": verification_id, "status": "rejected", "badge": status_badge("rejected")},
        message="Verification rejected",
    )
