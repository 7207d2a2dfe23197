from app.features.auth.schemas.auth import (
    LoginRequest,
    LoginResponse,
    OtpSubmission,
    PhoneSubmission,
    RegistrationStatus,
    RoleSelection,
    SendOtpRequest,
    UserInfo,
    VerifyOtpRequest,
)
from app.features.auth.schemas.registration import (
    BasicInfo,
    DocumentInfo,
    IndividualDetails,
    OrganizationDetails,
    SkillInfo,
    VendorDetails,
    VendorRegistration,
    WorkerRegistration,
)
