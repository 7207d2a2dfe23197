from typing import Any, List, Optional

from app.features.admin.schemas.verification import RejectionRequest, Verification
from app.platform.api_client import ApiClient, parse_list
from app.platform.logger import get_logger
from app.platform.schemas import unwrap_list

logger = get_logger("admin_verification")


class VerificationService:
    """Review queue for worker and vendor identity checks."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def list_verifications(self, status: Optional[str] = "pending") -> List[Verification]:
        params = {"status": status} if status else None
        payload = await self.client.get("/admin/verifications", params=params)
        return parse_list(Verification, unwrap_list(payload, "verifications"))

    async def approve(self, verification_id: str) -> Any:
        payload = await self.client.post(f"/admin/verifications/{verification_id}/approve")
        logger.info(f"Verification {verification_id} approved")
        return payload

    async def reject(self, verification_id: str, rejection: RejectionRequest) -> Any:
        payload = await self.client.post(
            f"/admin/verifications/{verification_id}/reject", json=rejection.to_payload()
        )
        logger.info(f"Verification {verification_id} rejected")
        return payload
