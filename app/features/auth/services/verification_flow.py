"""
Sign-in / sign-up flow for one browser.

    choosing_role -> entering_phone -> awaiting_otp -> logging_in -> done
                                                    \\-> registering -> done

A verified phone that is already known to the backend is logged in straight
away. An unknown phone is handed to the registration wizard instead; the
login endpoint is never called for it. Failures leave the flow where it was
with ``error`` set so the browser can retry the same step.

The OTP code only ever lives in the arguments of ``submit_otp``.
"""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

from app.features.auth.services.auth_api import AuthAPI
from app.features.auth.services.documents import DocumentService
from app.features.auth.services.registration_wizard import RegistrationWizard, WizardState
from app.platform.api_client import ApiError
from app.platform.exceptions import FieldValidationError, FlowStateError
from app.platform.logger import get_logger
from app.platform.schemas import unwrap
from app.platform.session import ROLE_HOME, Role, SessionStore
from app.platform.utils.validators import validate_otp, validate_phone

logger = get_logger("verification_flow")

REGISTRATION_SUCCESS_PAGE = "/registration-success"
ADMIN_NOT_FOUND_MESSAGE = "No admin account is registered with this phone number"


class FlowState(str, Enum):
    CHOOSING_ROLE = "choosing_role"
    ENTERING_PHONE = "entering_phone"
    AWAITING_OTP = "awaiting_otp"
    LOGGING_IN = "logging_in"
    REGISTERING = "registering"
    DONE = "done"


class VerificationStatus(str, Enum):
    UNSENT = "unsent"
    SENT = "sent"
    VERIFIED = "verified"
    FAILED = "failed"


class VerificationSession(BaseModel):
    phone: str
    status: VerificationStatus = VerificationStatus.UNSENT


class FlowSnapshot(BaseModel):
    state: FlowState = FlowState.CHOOSING_ROLE
    role: Optional[Role] = None
    verification: Optional[VerificationSession] = None
    registration: Optional[WizardState] = None
    error: Optional[str] = None
    redirect_to: Optional[str] = None


class VerificationFlow:
    def __init__(
        self,
        auth_api: AuthAPI,
        documents: DocumentService,
        session: SessionStore,
        snapshot: Optional[FlowSnapshot] = None,
    ):
        self.auth_api = auth_api
        self.documents = documents
        self.session = session
        self.snapshot = snapshot or FlowSnapshot()

    @property
    def state(self) -> FlowState:
        return self.snapshot.state

    @property
    def phone(self) -> Optional[str]:
        verification = self.snapshot.verification
        return verification.phone if verification else None

    def _require(self, *states: FlowState) -> None:
        if self.snapshot.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise FlowStateError(
                f"Cannot do that while {self.snapshot.state.value}; expected {allowed}"
            )

    def _move(self, state: FlowState) -> None:
        logger.info(f"Verification flow: {self.snapshot.state.value} -> {state.value}")
        self.snapshot.state = state

    def _fail(self, message: str) -> None:
        self.snapshot.error = message
        if self.snapshot.verification:
            self.snapshot.verification.status = VerificationStatus.FAILED

    def view(self) -> dict:
        snapshot = self.snapshot
        return {
            "state": snapshot.state,
            "role": snapshot.role,
            "phone": self.phone,
            "verification_status": snapshot.verification.status if snapshot.verification else None,
            "error": snapshot.error,
            "redirect_to": snapshot.redirect_to,
            "registration": self.wizard().view() if snapshot.registration else None,
        }

    def select_role(self, role: Role) -> None:
        self._require(FlowState.CHOOSING_ROLE)
        self.snapshot.role = role
        self.snapshot.error = None
        self._move(FlowState.ENTERING_PHONE)

    async def submit_phone(self, phone: str) -> None:
        self._require(FlowState.ENTERING_PHONE)
        try:
            phone = validate_phone(phone)
        except ValueError as e:
            raise FieldValidationError("phone", str(e)) from e

        self.snapshot.verification = VerificationSession(phone=phone)
        await self._dispatch_otp()

    async def resend_otp(self) -> None:
        self._require(FlowState.AWAITING_OTP)
        await self._dispatch_otp()

    async def _dispatch_otp(self) -> None:
        verification = self.snapshot.verification
        try:
            await self.auth_api.send_otp(verification.phone)
        except ApiError as e:
            logger.warning(f"OTP dispatch failed: {e.message}")
            self._fail(e.message)
            raise

        verification.status = VerificationStatus.SENT
        self.snapshot.error = None
        if self.snapshot.state != FlowState.AWAITING_OTP:
            self._move(FlowState.AWAITING_OTP)

    async def submit_otp(self, otp: str) -> None:
        self._require(FlowState.AWAITING_OTP)
        try:
            otp = validate_otp(otp)
        except ValueError as e:
            raise FieldValidationError("otp", str(e)) from e

        phone = self.phone
        try:
            await self.auth_api.verify_otp(phone, otp)
        except ApiError as e:
            logger.warning(f"OTP verification failed: {e.message}")
            self._fail(e.message)
            raise

        self.snapshot.verification.status = VerificationStatus.VERIFIED
        self.snapshot.error = None

        try:
            status = await self.auth_api.registration_status(phone)
        except ApiError as e:
            self.snapshot.error = e.message
            raise

        if status.is_registered:
            await self._login(phone, otp)
        else:
            self._start_registration(phone)

    async def _login(self, phone: str, otp: str) -> None:
        role = self.snapshot.role
        self._move(FlowState.LOGGING_IN)
        try:
            result = await self.auth_api.login(role, phone, otp)
        except ApiError as e:
            logger.warning(f"Login as {role.value} failed: {e.message}")
            self.snapshot.error = e.message
            self._move(FlowState.AWAITING_OTP)
            raise

        self.session.set(result.token, role)
        self._finish(ROLE_HOME[role])

    def _start_registration(self, phone: str) -> None:
        role = self.snapshot.role
        if role == Role.ADMIN:
            logger.warning("Unregistered phone tried to sign in as admin")
            self.snapshot.verification = None
            self.snapshot.error = ADMIN_NOT_FOUND_MESSAGE
            self._move(FlowState.ENTERING_PHONE)
            raise FlowStateError(ADMIN_NOT_FOUND_MESSAGE)

        self.snapshot.registration = WizardState(role=role, phone=phone)
        self._move(FlowState.REGISTERING)

    def change_phone(self) -> None:
        self._require(FlowState.AWAITING_OTP, FlowState.REGISTERING)
        self.snapshot.verification = None
        self.snapshot.registration = None
        self.snapshot.error = None
        self._move(FlowState.ENTERING_PHONE)

    def restart(self) -> None:
        self.snapshot = FlowSnapshot()
        logger.info("Verification flow restarted")

    def wizard(self) -> RegistrationWizard:
        if self.snapshot.registration is None:
            raise FlowStateError("No registration in progress. Please verify your phone number first.")
        return RegistrationWizard(
            self.snapshot.registration,
            self.auth_api,
            self.documents,
            on_registered=self._registered,
        )

    def _registered(self, response: Any) -> None:
        token = unwrap(response, "token")
        if isinstance(token, str) and token:
            self.session.set(token, self.snapshot.role)
        self._finish(REGISTRATION_SUCCESS_PAGE)

    def _finish(self, redirect_to: str) -> None:
        self.snapshot.verification = None
        self.snapshot.registration = None
        self.snapshot.error = None
        self.snapshot.redirect_to = redirect_to
        self._move(FlowState.DONE)
