from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.features.auth.dependencies.flow import get_registration_wizard, get_verification_flow
from app.features.auth.schemas.registration import BasicInfo, VendorDetails
from app.features.auth.services.registration_wizard import RegistrationWizard
from app.features.auth.services.verification_flow import VerificationFlow
from app.platform.response import api_response
from app.platform.schemas import Address
from app.platform.utils.file_upload import read_document, read_video

router = APIRouter(prefix="/register", tags=["Registration"])

REGISTERED_MESSAGE = "Registration submitted successfully"


def _split_skills(skills: List[str]) -> List[str]:
    # the form may send one field per skill or a single comma separated field
    return [part for entry in skills for part in entry.split(",")]


@router.get("", summary="Current registration step")
async def get_registration(wizard: RegistrationWizard = Depends(get_registration_wizard)):
    return api_response(data=wizard.view(), message="Registration state retrieved")


@router.post("/basic-info", summary="Name, date of birth, gender and email")
async def submit_basic_info(
    body: BasicInfo,
    wizard: RegistrationWizard = Depends(get_registration_wizard),
):
    await wizard.submit_basic_info(body)
    return api_response(data=wizard.view(), message="Basic information saved")


@router.post("/document-info", summary="Aadhaar number, address and Aadhaar document")
async def submit_document_info(
    aadhaar_number: str = Form(...),
    street: str = Form(...),
    city: str = Form(...),
    state: str = Form(...),
    pincode: str = Form(...),
    country: str = Form("India"),
    aadhaar_document: Optional[UploadFile] = File(None),
    wizard: RegistrationWizard = Depends(get_registration_wizard),
):
    address = Address(street=street, city=city, state=state, pincode=pincode, country=country)
    document = await read_document(aadhaar_document)
    await wizard.submit_document_info(aadhaar_number, address, document)
    return api_response(data=wizard.view(), message="Document information saved")


@router.post("/skill-info", status_code=status.HTTP_201_CREATED, summary="Skills and verification video (workers)")
async def submit_skill_info(
    skills: List[str] = Form(...),
    category: Optional[str] = Form(None),
    verification_video: Optional[UploadFile] = File(None),
    wizard: RegistrationWizard = Depends(get_registration_wizard),
    flow: VerificationFlow = Depends(get_verification_flow),
):
    video = await read_video(verification_video)
    await wizard.submit_skill_info(_split_skills(skills), video, category=category)
    return api_response(
        data=flow.view(),
        message=REGISTERED_MESSAGE,
        status_code=status.HTTP_201_CREATED,
        redirect=flow.snapshot.redirect_to,
    )


@router.post("/vendor-details", status_code=status.HTTP_201_CREATED, summary="Business details (employers)")
async def submit_vendor_details(
    body: VendorDetails,
    wizard: RegistrationWizard = Depends(get_registration_wizard),
    flow: VerificationFlow = Depends(get_verification_flow),
):
    await wizard.submit_vendor_details(body)
    return api_response(
        data=flow.view(),
        message=REGISTERED_MESSAGE,
        status_code=status.HTTP_201_CREATED,
        redirect=flow.snapshot.redirect_to,
    )


@router.post("/submit", status_code=status.HTTP_201_CREATED, summary="Retry a failed registration")
async def submit_registration(
    wizard: RegistrationWizard = Depends(get_registration_wizard),
    flow: VerificationFlow = Depends(get_verification_flow),
):
    await wizard.submit()
    return api_response(
        data=flow.view(),
        message=REGISTERED_MESSAGE,
        status_code=status.HTTP_201_CREATED,
        redirect=flow.snapshot.redirect_to,
    )


@router.post("/back", summary="Return to the previous step")
async def go_back(wizard: RegistrationWizard = Depends(get_registration_wizard)):
    wizard.go_back()
    return api_response(data=wizard.view(), message="Moved to previous step")
