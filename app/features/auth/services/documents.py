from typing import Any, Optional

from app.platform.api_client import ApiClient
from app.platform.utils.file_upload import FilePart


def document_reference(payload: Any) -> Optional[str]:
    """Pick the stored-document handle out of an upload response."""
    if not isinstance(payload, dict):
        return None
    if isinstance(payload.get("data"), dict):
        nested = document_reference(payload["data"])
        if nested:
            return nested
    for key in ("url", "fileUrl", "documentUrl", "id", "_id"):
        value = payload.get(key)
        if value:
            return str(value)
    return None


class DocumentService:
    """Registration uploads; sent without the session token like the rest of sign-up."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def upload_aadhaar(self, file: FilePart) -> Optional[str]:
        payload = await self.client.post(
            "/documents/aadhaar", files={"file": file.as_multipart()}, data={}, authenticated=False
        )
        return document_reference(payload)

    async def upload_skill_proof(
        self, file: FilePart, skill: str, certificate_type: str = "video"
    ) -> Optional[str]:
        payload = await self.client.post(
            "/documents/skill-proof",
            files={"file": file.as_multipart()},
            data={"skill": skill, "certificateType": certificate_type},
            authenticated=False,
        )
        return document_reference(payload)
