from fastapi import APIRouter, Depends, status

from app.features.auth.dependencies.flow import get_flow_repository, get_verification_flow
from app.features.auth.schemas.auth import OtpSubmission, PhoneSubmission, RoleSelection
from app.features.auth.services.verification_flow import VerificationFlow
from app.features.auth.utils.flow_store import FlowRepository
from app.platform.dependencies import get_session_id, get_session_store
from app.platform.response import api_response
from app.platform.session import SessionStore

router = APIRouter(tags=["Sign in"])


@router.get("/signin", summary="Current sign-in step")
async def get_signin(flow: VerificationFlow = Depends(get_verification_flow)):
    return api_response(data=flow.view(), message="Sign-in state retrieved")


@router.post("/signin/role", summary="Choose worker, employer or admin")
async def select_role(
    body: RoleSelection,
    flow: VerificationFlow = Depends(get_verification_flow),
):
    flow.select_role(body.role)
    return api_response(data=flow.view(), message="Role selected")


@router.post("/signin/phone", summary="Send an OTP to a phone number")
async def submit_phone(
    body: PhoneSubmission,
    flow: VerificationFlow = Depends(get_verification_flow),
):
    await flow.submit_phone(body.phone)
    return api_response(data=flow.view(), message="OTP sent successfully")


@router.post("/signin/otp", summary="Verify the OTP")
async def submit_otp(
    body: OtpSubmission,
    flow: VerificationFlow = Depends(get_verification_flow),
):
    """
    Verify the code, then either sign in (known phone) or open registration.
    When the flow has finished, ``redirect_to`` says where the browser goes next.
    """
    await flow.submit_otp(body.otp)
    message = "Signed in successfully" if flow.snapshot.redirect_to else "Phone verified. Please complete your registration"
    return api_response(data=flow.view(), message=message)


@router.post("/signin/resend", summary="Send the OTP again")
async def resend_otp(flow: VerificationFlow = Depends(get_verification_flow)):
    await flow.resend_otp()
    return api_response(data=flow.view(), message="OTP resent successfully")


@router.post("/signin/change-phone", summary="Go back and use a different phone number")
async def change_phone(flow: VerificationFlow = Depends(get_verification_flow)):
    flow.change_phone()
    return api_response(data=flow.view(), message="Enter a new phone number")


@router.post("/signin/restart", summary="Start over and pick a role again")
async def restart(flow: VerificationFlow = Depends(get_verification_flow)):
    flow.restart()
    return api_response(data=flow.view(), message="Sign-in restarted")


@router.get("/session", summary="Who is signed in on this browser")
async def get_session(session_store: SessionStore = Depends(get_session_store)):
    current = session_store.get()
    return api_response(
        data={"authenticated": current is not None, "role": current.role if current else None},
        message="Session retrieved",
    )


@router.post("/logout", status_code=status.HTTP_200_OK, summary="Sign out")
async def logout(
    session_id: str = Depends(get_session_id),
    session_store: SessionStore = Depends(get_session_store),
    flows: FlowRepository = Depends(get_flow_repository),
):
    session_store.clear()
    await flows.clear(session_id)
    return api_response(message="Logged out successfully", redirect="/login")
