from typing import Any, Union

from app.features.auth.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegistrationStatus,
    SendOtpRequest,
    VerifyOtpRequest,
)
from app.features.auth.schemas.registration import VendorRegistration, WorkerRegistration
from app.platform.api_client import ApiClient, parse_response
from app.platform.config import settings
from app.platform.session import Role

LOGIN_PATHS = {
    Role.WORKER: "/auth/login/user",
    Role.EMPLOYER: "/auth/login/vendor",
    Role.ADMIN: "/auth/login/admin",
}

REGISTER_PATHS = {
    Role.WORKER: "/auth/register/user",
    Role.EMPLOYER: "/auth/register/vendor",
}


class AuthAPI:
    """
    Backend endpoints used while signing in or registering.

    None of them carry the session token: a browser may still hold one from
    an earlier sign-in, and a rejected OTP must not be read as an expired
    session.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    async def send_otp(self, phone: str, channel: str = None) -> Any:
        body = SendOtpRequest(to=phone, channel=channel or settings.OTP_CHANNEL)
        return await self.client.post("/auth/send-otp", json=body.to_payload(), authenticated=False)

    async def verify_otp(self, phone: str, code: str) -> Any:
        body = VerifyOtpRequest(to=phone, code=code)
        return await self.client.post("/auth/verify-otp", json=body.to_payload(), authenticated=False)

    async def registration_status(self, phone: str) -> RegistrationStatus:
        payload = await self.client.get(
            "/auth/registration-status", params={"phone": phone}, authenticated=False
        )
        if isinstance(payload, dict) and "data" in payload and "isRegistered" not in payload:
            payload = payload["data"]
        return parse_response(RegistrationStatus, payload)

    async def login(self, role: Role, phone: str, code: str) -> LoginResponse:
        body = LoginRequest(phone=phone, code=code)
        payload = await self.client.post(LOGIN_PATHS[role], json=body.to_payload(), authenticated=False)
        if isinstance(payload, dict) and "token" not in payload and isinstance(payload.get("data"), dict):
            payload = payload["data"]
        return parse_response(LoginResponse, payload)

    async def register(
        self, role: Role, registration: Union[WorkerRegistration, VendorRegistration]
    ) -> Any:
        return await self.client.post(
            REGISTER_PATHS[role], json=registration.to_payload(), authenticated=False
        )
