from datetime import date
from typing import List, Literal, Optional, Union

from pydantic import AliasChoices, ConfigDict, EmailStr, Field, field_validator

from app.features.auth.schemas.registration import clean_skills
from app.platform.schemas import CamelModel, Location, RequiredSkill, Salary, WorkingHours
from app.platform.utils.validators import validate_phone

OfferStatus = Literal["pending", "accepted", "rejected"]


class Job(CamelModel):
    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    job_title: str
    description: Optional[str] = None
    salary: Optional[Salary] = None
    budget: Optional[Union[str, float]] = None
    duration: Optional[str] = None
    location: Optional[Location] = None
    category: Optional[str] = None
    required_skills: List[RequiredSkill] = []
    working_hours: Optional[WorkingHours] = None
    benefits: List[str] = []
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class Offer(CamelModel):
    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    title: str
    description: Optional[str] = None
    # offers are created with a flat amount, older ones carry {amount, period}
    salary: Optional[Union[Salary, float]] = None
    budget: Optional[Union[str, float]] = None
    duration: Optional[str] = None
    location: Optional[Location] = None
    category: Optional[str] = None
    working_hours: Optional[WorkingHours] = None
    benefits: List[str] = []
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: OfferStatus = "pending"


class Application(CamelModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    job_id: Optional[str] = None
    job: Optional[Job] = None
    status: str = "pending"
    applied_at: Optional[str] = None


class Experience(CamelModel):
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    start_date: str = Field(..., min_length=1)
    end_date: Optional[str] = None
    current: bool = False
    description: Optional[str] = None


class Education(CamelModel):
    degree: str = Field(..., min_length=1)
    institution: str = Field(..., min_length=1)
    year: str = Field(..., min_length=1)
    field: str = Field(..., min_length=1)


class WorkerProfile(CamelModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    category: Optional[str] = None
    skills: List[str] = []
    current_location: Optional[Location] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    experience: List[Experience] = []
    education: List[Education] = []


class ProfileUpdate(CamelModel):
    """Body of PUT /worker/profile."""

    name: str
    email: EmailStr
    phone: str
    date_of_birth: date
    gender: Literal["male", "female", "other"]
    skills: List[str]
    experience: List[Experience] = []
    education: List[Education] = []

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return validate_phone(v)

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: List[str]) -> List[str]:
        v = clean_skills(v)
        if not v:
            raise ValueError("At least one skill is required")
        return v


class OfferResponse(CamelModel):
    response: Literal["accepted", "rejected"]


class DashboardStats(CamelModel):
    profile_completion: int
    total_applications: int
    pending_offers: int
    accepted_offers: int
