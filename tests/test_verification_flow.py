from unittest.mock import MagicMock

import pytest

from app.features.auth.schemas.auth import LoginResponse, RegistrationStatus
from app.features.auth.services.auth_api import AuthAPI
from app.features.auth.services.documents import DocumentService
from app.features.auth.services.verification_flow import (
    FlowState,
    VerificationFlow,
    VerificationStatus,
)
from app.platform.api_client import ApiError, ErrorKind
from app.platform.exceptions import FieldValidationError, FlowStateError
from app.platform.session import Role, SessionStore

PHONE = "9876543210"


@pytest.fixture
def auth_api():
    api = MagicMock(spec=AuthAPI)
    api.send_otp.return_value = {"success": True}
    api.verify_otp.return_value = {"success": True}
    api.registration_status.return_value = RegistrationStatus(is_registered=True)
    api.login.return_value = LoginResponse(token="abc")
    return api


@pytest.fixture
def session():
    return SessionStore()


@pytest.fixture
def flow(auth_api, session):
    return VerificationFlow(auth_api, MagicMock(spec=DocumentService), session)


async def at_otp_step(flow, role=Role.WORKER):
    flow.select_role(role)
    await flow.submit_phone(PHONE)
    return flow


class TestPhoneStep:
    def test_starts_by_choosing_a_role(self, flow):
        assert flow.state == FlowState.CHOOSING_ROLE

    def test_select_role(self, flow):
        flow.select_role(Role.EMPLOYER)
        assert flow.state == FlowState.ENTERING_PHONE
        assert flow.snapshot.role == Role.EMPLOYER

    def test_role_cannot_change_once_chosen(self, flow):
        flow.select_role(Role.WORKER)
        with pytest.raises(FlowStateError):
            flow.select_role(Role.EMPLOYER)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("phone", ["12345", "98765432101", "98765abcde", ""])
    async def test_bad_phone_is_rejected_without_a_call(self, flow, auth_api, phone):
        flow.select_role(Role.WORKER)

        with pytest.raises(FieldValidationError) as exc_info:
            await flow.submit_phone(phone)

        assert exc_info.value.field == "phone"
        auth_api.send_otp.assert_not_called()
        assert flow.state == FlowState.ENTERING_PHONE

    @pytest.mark.asyncio
    async def test_good_phone_sends_otp(self, flow, auth_api):
        await at_otp_step(flow)

        auth_api.send_otp.assert_awaited_once_with(PHONE)
        assert flow.state == FlowState.AWAITING_OTP
        assert flow.snapshot.verification.status == VerificationStatus.SENT

    @pytest.mark.asyncio
    async def test_dispatch_failure_stays_on_phone_step(self, flow, auth_api):
        auth_api.send_otp.side_effect = ApiError("Phone number is blocked", ErrorKind.RESPONSE, 400)
        flow.select_role(Role.WORKER)

        with pytest.raises(ApiError):
            await flow.submit_phone(PHONE)

        assert flow.state == FlowState.ENTERING_PHONE
        assert flow.snapshot.error == "Phone number is blocked"
        assert flow.snapshot.verification.status == VerificationStatus.FAILED

        # resubmittable
        auth_api.send_otp.side_effect = None
        await flow.submit_phone(PHONE)
        assert flow.state == FlowState.AWAITING_OTP
        assert flow.snapshot.error is None

    @pytest.mark.asyncio
    async def test_phone_cannot_be_submitted_before_role(self, flow):
        with pytest.raises(FlowStateError):
            await flow.submit_phone(PHONE)


class TestOtpStep:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("otp", ["12345", "1234567", "12a456", ""])
    async def test_bad_otp_is_rejected_locally(self, flow, auth_api, otp):
        await at_otp_step(flow)

        with pytest.raises(FieldValidationError) as exc_info:
            await flow.submit_otp(otp)

        assert exc_info.value.field == "otp"
        auth_api.verify_otp.assert_not_called()

    @pytest.mark.asyncio
    async def test_registered_phone_logs_in(self, flow, auth_api, session):
        await at_otp_step(flow)

        await flow.submit_otp("123456")

        auth_api.verify_otp.assert_awaited_once_with(PHONE, "123456")
        auth_api.registration_status.assert_awaited_once_with(PHONE)
        auth_api.login.assert_awaited_once_with(Role.WORKER, PHONE, "123456")
        assert session.token == "abc"
        assert session.role == Role.WORKER
        assert flow.state == FlowState.DONE
        assert flow.snapshot.redirect_to == "/dashboard"
        assert flow.snapshot.registration is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "role, home", [(Role.EMPLOYER, "/employer"), (Role.ADMIN, "/admin")]
    )
    async def test_login_redirects_to_role_home(self, flow, session, role, home):
        await at_otp_step(flow, role)
        await flow.submit_otp("123456")

        assert session.role == role
        assert flow.snapshot.redirect_to == home

    @pytest.mark.asyncio
    async def test_unregistered_phone_opens_registration(self, flow, auth_api, session):
        auth_api.registration_status.return_value = RegistrationStatus(is_registered=False)
        await at_otp_step(flow)

        await flow.submit_otp("123456")

        auth_api.login.assert_not_called()
        assert session.get() is None
        assert flow.state == FlowState.REGISTERING
        assert flow.snapshot.registration.phone == PHONE
        assert flow.snapshot.registration.role == Role.WORKER

    @pytest.mark.asyncio
    async def test_unregistered_admin_cannot_register(self, flow, auth_api):
        auth_api.registration_status.return_value = RegistrationStatus(is_registered=False)
        await at_otp_step(flow, Role.ADMIN)

        with pytest.raises(FlowStateError):
            await flow.submit_otp("123456")

        auth_api.login.assert_not_called()
        assert flow.state == FlowState.ENTERING_PHONE
        assert flow.snapshot.registration is None
        assert flow.snapshot.error

    @pytest.mark.asyncio
    async def test_wrong_otp_stays_for_retry(self, flow, auth_api):
        auth_api.verify_otp.side_effect = ApiError("Invalid OTP", ErrorKind.RESPONSE, 400)
        await at_otp_step(flow)

        with pytest.raises(ApiError):
            await flow.submit_otp("000000")

        assert flow.state == FlowState.AWAITING_OTP
        assert flow.snapshot.error == "Invalid OTP"
        assert flow.snapshot.verification.status == VerificationStatus.FAILED
        auth_api.registration_status.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_failure_goes_back_to_otp(self, flow, auth_api, session):
        auth_api.login.side_effect = ApiError("No response received from server", ErrorKind.NO_RESPONSE)
        await at_otp_step(flow)

        with pytest.raises(ApiError):
            await flow.submit_otp("123456")

        assert flow.state == FlowState.AWAITING_OTP
        assert flow.snapshot.error == "No response received from server"
        assert session.get() is None

    @pytest.mark.asyncio
    async def test_resend_is_a_fresh_dispatch(self, flow, auth_api):
        await at_otp_step(flow)
        await flow.resend_otp()

        assert auth_api.send_otp.await_count == 2
        assert flow.state == FlowState.AWAITING_OTP


class TestChangePhoneAndRestart:
    @pytest.mark.asyncio
    async def test_change_phone_discards_verification(self, flow, auth_api):
        await at_otp_step(flow)

        flow.change_phone()

        assert flow.state == FlowState.ENTERING_PHONE
        assert flow.snapshot.verification is None
        assert flow.snapshot.role == Role.WORKER

        # a stale OTP cannot be submitted against the new number
        with pytest.raises(FlowStateError):
            await flow.submit_otp("123456")
        auth_api.verify_otp.assert_not_called()

        await flow.submit_phone("9123456780")
        assert flow.phone == "9123456780"

    @pytest.mark.asyncio
    async def test_change_phone_discards_partial_registration(self, flow, auth_api):
        auth_api.registration_status.return_value = RegistrationStatus(is_registered=False)
        await at_otp_step(flow)
        await flow.submit_otp("123456")

        flow.change_phone()

        assert flow.snapshot.registration is None
        with pytest.raises(FlowStateError):
            flow.wizard()

    def test_change_phone_needs_a_phone(self, flow):
        flow.select_role(Role.WORKER)
        with pytest.raises(FlowStateError):
            flow.change_phone()

    @pytest.mark.asyncio
    async def test_restart_goes_back_to_role_choice(self, flow):
        await at_otp_step(flow)

        flow.restart()

        assert flow.state == FlowState.CHOOSING_ROLE
        assert flow.snapshot.role is None
        assert flow.phone is None
        flow.select_role(Role.EMPLOYER)
        assert flow.snapshot.role == Role.EMPLOYER


@pytest.mark.asyncio
async def test_otp_is_never_kept(flow, auth_api):
    auth_api.registration_status.return_value = RegistrationStatus(is_registered=False)
    await at_otp_step(flow)
    await flow.submit_otp("123456")

    assert "123456" not in flow.snapshot.model_dump_json()
