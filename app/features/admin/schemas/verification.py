from typing import List, Literal, Optional

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from app.platform.schemas import CamelModel

VerificationStatus = Literal["pending", "approved", "rejected"]


class VerificationDocument(CamelModel):
    type: str
    url: str


class Verification(CamelModel):
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    name: str
    type: Literal["worker", "vendor"]
    status: VerificationStatus = "pending"
    documents: List[VerificationDocument] = []
    submitted_at: Optional[str] = None
    skills: Optional[List[str]] = None
    business_name: Optional[str] = None
    rejection_reason: Optional[str] = None


class RejectionRequest(CamelModel):
    reason: str = Field("", validate_default=True)

    @field_validator("reason")
    @classmethod
    def require_reason(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please provide a reason for rejection")
        return v
