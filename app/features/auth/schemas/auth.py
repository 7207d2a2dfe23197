from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.platform.schemas import CamelModel
from app.platform.session import Role


# ── Browser → app ───────────────────────────

class RoleSelection(BaseModel):
    role: Role


class PhoneSubmission(BaseModel):
    # checked by the flow so the same rule applies however it is reached
    phone: str


class OtpSubmission(BaseModel):
    otp: str


# ── App → backend ───────────────────────────

class SendOtpRequest(CamelModel):
    to: str
    channel: Literal["sms", "email"] = "sms"


class VerifyOtpRequest(CamelModel):
    to: str
    code: str


class LoginRequest(CamelModel):
    phone: str
    code: str


# ── Backend → app ───────────────────────────

class UserInfo(CamelModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    category: Optional[str] = None


class LoginResponse(CamelModel):
    token: str = Field(..., min_length=1)
    refresh_token: Optional[str] = None
    expires_at: Optional[str] = None
    user: Optional[UserInfo] = None


class RegistrationStatus(CamelModel):
    is_registered: bool
