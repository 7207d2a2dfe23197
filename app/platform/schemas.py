"""
Shapes shared by several features.

The marketplace backend speaks camelCase JSON. Models here accept either
camelCase or snake_case input and serialize back to camelCase through
``to_payload``.
"""
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.platform.utils.validators import validate_pincode


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        """Body as the backend expects it."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Address(CamelModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    pincode: str
    country: str = "India"

    @field_validator("street", "city", "state", "country")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("This field is required")
        return v

    @field_validator("pincode")
    @classmethod
    def check_pincode(cls, v: str) -> str:
        return validate_pincode(v)


class LocationAddress(CamelModel):
    city: str
    state: str
    pincode: str
    full_address: str

    @field_validator("pincode")
    @classmethod
    def check_pincode(cls, v: str) -> str:
        return validate_pincode(v)


class Location(CamelModel):
    """GeoJSON point; coordinates are [longitude, latitude]."""

    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(..., min_length=2, max_length=2)
    address: LocationAddress


class WorkingHours(CamelModel):
    from_: str = Field(..., alias="from")
    to: str
    is_flexible: bool = False


def unwrap(payload: Any, key: str) -> Any:
    """
    Pull a resource out of a backend body.

    The backend is not consistent: some endpoints return the resource
    itself, others wrap it under its own name or under "data".
    """
    if isinstance(payload, dict):
        if key in payload:
            return payload[key]
        if "data" in payload:
            return unwrap(payload["data"], key)
    return payload


def unwrap_list(payload: Any, key: str) -> list:
    items = unwrap(payload, key)
    return items if isinstance(items, list) else []


class Salary(CamelModel):
    amount: float = Field(..., ge=0)
    period: str = Field(..., min_length=1)


class RequiredSkill(CamelModel):
    skill: str = Field(..., min_length=1)
    experience_years: int = Field(0, ge=0)
