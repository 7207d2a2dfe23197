from datetime import date
from typing import List, Literal, Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from app.platform.schemas import Address, CamelModel, Location
from app.platform.utils.validators import validate_aadhaar


def clean_skills(skills: List[str]) -> List[str]:
    """Trim, drop blanks and keep the first occurrence of each skill."""
    cleaned = []
    for skill in skills:
        skill = skill.strip()
        if skill and skill not in cleaned:
            cleaned.append(skill)
    return cleaned


class BasicInfo(CamelModel):
    name: str
    date_of_birth: date
    gender: Literal["male", "female", "other"]
    email: Optional[EmailStr] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v: date) -> date:
        if v >= date.today():
            raise ValueError("Date of birth must be in the past")
        return v


class DocumentInfo(CamelModel):
    aadhaar_number: str
    address: Address
    # reference returned by POST /documents/aadhaar
    aadhaar_document: Optional[str] = None

    @field_validator("aadhaar_number")
    @classmethod
    def check_aadhaar(cls, v: str) -> str:
        return validate_aadhaar(v)


class SkillInfo(CamelModel):
    skills: List[str]
    category: Optional[str] = None
    # reference returned by POST /documents/skill-proof
    verification_video: Optional[str] = None

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: List[str]) -> List[str]:
        v = clean_skills(v)
        if not v:
            raise ValueError("Please add at least one skill")
        return v


class OrganizationDetails(CamelModel):
    company_name: str = Field(..., min_length=1)
    company_registration_number: str = Field(..., min_length=1)
    gst_number: str = Field(..., min_length=1)
    address: Address
    business_proof: Optional[str] = None
    registration_certificate: Optional[str] = None


class IndividualDetails(CamelModel):
    occupation: str = Field(..., min_length=1)
    experience_years: int = Field(..., ge=0)
    skills: List[str] = []
    work_samples: Optional[List[str]] = None
    identity_proof: Optional[str] = None

    @field_validator("skills")
    @classmethod
    def tidy_skills(cls, v: List[str]) -> List[str]:
        return clean_skills(v)


class VendorDetails(CamelModel):
    vendor_type: Literal["organization", "individual"]
    business_type: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    category: Optional[str] = None
    location: Optional[Location] = None
    organization_details: Optional[OrganizationDetails] = None
    individual_details: Optional[IndividualDetails] = None

    @model_validator(mode="after")
    def details_match_type(self):
        if self.vendor_type == "organization" and self.organization_details is None:
            raise ValueError("Organization details are required for an organization")
        if self.vendor_type == "individual" and self.individual_details is None:
            raise ValueError("Individual details are required for an individual vendor")
        return self


class WorkerRegistration(CamelModel):
    """Body of POST /auth/register/user."""

    name: str
    phone: str
    date_of_birth: date
    gender: str
    email: Optional[str] = None
    aadhaar_number: str
    aadhaar_document: Optional[str] = None
    address: Address
    skills: List[str]
    category: Optional[str] = None
    verification_video: Optional[str] = None


class VendorRegistration(CamelModel):
    """Body of POST /auth/register/vendor."""

    name: str
    phone: str
    date_of_birth: date
    gender: str
    email: Optional[str] = None
    aadhaar_number: str
    aadhaar_document: Optional[str] = None
    address: Address
    vendor_type: str
    business_type: str
    category: Optional[str] = None
    location: Optional[Location] = None
    organization_details: Optional[OrganizationDetails] = None
    individual_details: Optional[IndividualDetails] = None
