from typing import List, Optional, Union

from pydantic import AliasChoices, ConfigDict, Field, field_validator, model_validator

from app.platform.schemas import CamelModel, Location, RequiredSkill, Salary, WorkingHours


def _non_blank(values: List[str]) -> List[str]:
    return [value.strip() for value in values if value and value.strip()]


class EmployerProfile(CamelModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    business_type: Optional[str] = None
    location: Optional[Location] = None


class WorkerSummary(CamelModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    name: Optional[str] = None
    phone: Optional[str] = None
    category: Optional[str] = None
    skills: List[str] = []
    current_location: Optional[Location] = None


class _DatedWork(CamelModel):
    description: str = Field(..., min_length=1)
    duration: str = Field(..., min_length=1)
    location: Location
    working_hours: WorkingHours
    benefits: List[str] = []
    start_date: str = Field(..., min_length=1)
    end_date: str = Field(..., min_length=1)

    @field_validator("benefits")
    @classmethod
    def tidy_benefits(cls, v: List[str]) -> List[str]:
        return _non_blank(v)

    @model_validator(mode="after")
    def end_after_start(self):
        # ISO dates compare correctly as strings
        if self.end_date < self.start_date:
            raise ValueError("End date must be after the start date")
        return self


class OfferCreate(_DatedWork):
    """Body of POST /employer/offers."""

    worker_id: str = Field(..., min_length=1, alias="workerID")
    title: str = Field(..., min_length=1)
    salary: float = Field(..., gt=0)
    budget: float = Field(..., ge=0)
    required_skills: List[str] = []

    @field_validator("required_skills")
    @classmethod
    def tidy_skills(cls, v: List[str]) -> List[str]:
        return _non_blank(v)


class JobPost(_DatedWork):
    """Body of POST /employer/jobs."""

    job_title: str = Field(..., min_length=1)
    salary: Salary
    budget: Union[str, float]
    category: str = Field(..., min_length=1)
    required_skills: List[RequiredSkill] = Field(..., min_length=1)
