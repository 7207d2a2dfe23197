"""
Multi-step registration for a phone number that has just been verified.

Steps run in a fixed order: basic info, then documents, then the
role-specific final step (skills for workers, business details for
employers). Each step is validated locally when it is committed. The
document and skill steps must finish their upload before the wizard moves
on. The final step sends the whole payload in a single registration call.
"""
from enum import Enum
from typing import Any, Callable, List, Optional

from pydantic import BaseModel

from app.features.auth.schemas.registration import (
    BasicInfo,
    DocumentInfo,
    SkillInfo,
    VendorDetails,
    VendorRegistration,
    WorkerRegistration,
)
from app.features.auth.services.auth_api import AuthAPI
from app.features.auth.services.documents import DocumentService
from app.platform.api_client import ApiError
from app.platform.exceptions import FieldValidationError, FlowStateError
from app.platform.logger import get_logger
from app.platform.schemas import Address
from app.platform.session import Role
from app.platform.utils.file_upload import FilePart

logger = get_logger("registration_wizard")


class WizardStep(str, Enum):
    BASIC_INFO = "basic-info"
    DOCUMENT_INFO = "document-info"
    SKILL_INFO = "skill-info"
    VENDOR_DETAILS = "vendor-details"


STEP_TITLES = {
    WizardStep.BASIC_INFO: "Basic Information",
    WizardStep.DOCUMENT_INFO: "Document Information",
    WizardStep.SKILL_INFO: "Skills & Verification",
    WizardStep.VENDOR_DETAILS: "Business Details",
}

ROLE_STEPS = {
    Role.WORKER: [WizardStep.BASIC_INFO, WizardStep.DOCUMENT_INFO, WizardStep.SKILL_INFO],
    Role.EMPLOYER: [WizardStep.BASIC_INFO, WizardStep.DOCUMENT_INFO, WizardStep.VENDOR_DETAILS],
}


class WizardState(BaseModel):
    role: Role
    phone: str
    current_step: int = 0
    basic_info: Optional[BasicInfo] = None
    document_info: Optional[DocumentInfo] = None
    skill_info: Optional[SkillInfo] = None
    vendor_details: Optional[VendorDetails] = None
    submitted: bool = False
    error: Optional[str] = None


class RegistrationWizard:
    def __init__(
        self,
        state: WizardState,
        auth_api: AuthAPI,
        documents: DocumentService,
        on_registered: Optional[Callable[[Any], None]] = None,
    ):
        self.state = state
        self.auth_api = auth_api
        self.documents = documents
        self.on_registered = on_registered

    @property
    def steps(self) -> List[WizardStep]:
        return ROLE_STEPS[self.state.role]

    @property
    def step(self) -> WizardStep:
        return self.steps[self.state.current_step]

    @property
    def is_final_step(self) -> bool:
        return self.state.current_step == len(self.steps) - 1

    def view(self) -> dict:
        return {
            "phone": self.state.phone,
            "role": self.state.role,
            "current_step": self.step,
            "steps": [
                {"id": step, "title": STEP_TITLES[step], "completed": index < self.state.current_step}
                for index, step in enumerate(self.steps)
            ],
            "basic_info": self.state.basic_info,
            "document_info": self.state.document_info,
            "skill_info": self.state.skill_info,
            "vendor_details": self.state.vendor_details,
            "error": self.state.error,
        }

    def _expect(self, step: WizardStep) -> None:
        if self.state.submitted:
            raise FlowStateError("Registration has already been submitted")
        if step not in self.steps:
            raise FlowStateError(f"{STEP_TITLES[step]} is not part of {self.state.role.value} registration")
        if self.step != step:
            raise FlowStateError(f"Please complete {STEP_TITLES[self.step]} first")

    def _advance(self) -> None:
        self.state.current_step += 1
        self.state.error = None
        logger.info(f"Registration for {self.state.role.value} moved to {self.step.value}")

    def go_back(self) -> None:
        if self.state.submitted:
            raise FlowStateError("Registration has already been submitted")
        if self.state.current_step > 0:
            self.state.current_step -= 1
        self.state.error = None

    async def submit_basic_info(self, info: BasicInfo) -> None:
        self._expect(WizardStep.BASIC_INFO)
        self.state.basic_info = info
        self._advance()

    async def submit_document_info(
        self, aadhaar_number: str, address: Address, document: Optional[FilePart]
    ) -> None:
        self._expect(WizardStep.DOCUMENT_INFO)
        info = DocumentInfo(aadhaar_number=aadhaar_number, address=address)
        if document is None:
            raise FieldValidationError("aadhaar_document", "Please upload your Aadhaar document")

        try:
            info.aadhaar_document = await self.documents.upload_aadhaar(document)
        except ApiError as e:
            self.state.error = e.message
            raise

        self.state.document_info = info
        self._advance()

    async def submit_skill_info(
        self, skills: List[str], video: Optional[FilePart], category: Optional[str] = None
    ) -> Any:
        self._expect(WizardStep.SKILL_INFO)
        info = SkillInfo(skills=skills, category=category)
        if video is None:
            raise FieldValidationError("verification_video", "Please upload a verification video")

        try:
            info.verification_video = await self.documents.upload_skill_proof(
                video, skill=", ".join(info.skills), certificate_type="video"
            )
        except ApiError as e:
            self.state.error = e.message
            raise

        self.state.skill_info = info
        return await self.submit()

    async def submit_vendor_details(self, details: VendorDetails) -> Any:
        self._expect(WizardStep.VENDOR_DETAILS)
        self.state.vendor_details = details
        return await self.submit()

    def build_payload(self):
        state = self.state
        basic, documents = state.basic_info, state.document_info
        if basic is None or documents is None:
            raise FlowStateError("Registration is incomplete")

        common = dict(
            name=basic.name,
            phone=state.phone,
            date_of_birth=basic.date_of_birth,
            gender=basic.gender,
            email=basic.email,
            aadhaar_number=documents.aadhaar_number,
            aadhaar_document=documents.aadhaar_document,
            address=documents.address,
        )

        if state.role == Role.WORKER:
            if state.skill_info is None:
                raise FlowStateError("Registration is incomplete")
            return WorkerRegistration(
                **common,
                skills=state.skill_info.skills,
                category=state.skill_info.category,
                verification_video=state.skill_info.verification_video,
            )

        details = state.vendor_details
        if details is None:
            raise FlowStateError("Registration is incomplete")
        if details.email:
            common["email"] = details.email
        return VendorRegistration(
            **common,
            vendor_type=details.vendor_type,
            business_type=details.business_type,
            category=details.category,
            location=details.location,
            organization_details=details.organization_details,
            individual_details=details.individual_details,
        )

    async def submit(self) -> Any:
        """Send the registration; on failure everything entered is kept for a retry."""
        if not self.is_final_step:
            raise FlowStateError(f"Please complete {STEP_TITLES[self.step]} first")
        if self.state.submitted:
            raise FlowStateError("Registration has already been submitted")

        payload = self.build_payload()
        try:
            response = await self.auth_api.register(self.state.role, payload)
        except ApiError as e:
            self.state.error = e.message
            logger.warning(f"Registration for {self.state.role.value} failed: {e.message}")
            raise

        self.state.submitted = True
        self.state.error = None
        logger.info(f"Registration submitted for {self.state.role.value}")
        if self.on_registered:
            self.on_registered(response)
        return response
