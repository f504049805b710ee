# fleet/schemas/vehicle.py
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional
from fleet.schemas.user import UserOut


class VehicleIn(BaseModel):
    registration_number: str = Field(min_length=1, max_length=255)
    model: str = Field(min_length=1, max_length=255)
    year: int

    @field_validator("registration_number", "model")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("This field is required.")
        return value

    @field_validator("year")
    @classmethod
    def year_in_range(cls, value: int) -> int:
        latest = date.today().year + 1
        if not 1900 <= value <= latest:
            raise ValueError(f"The year must be between 1900 and {latest}.")
        return value


class VehicleOut(BaseModel):
    id: int
    registration_number: str
    model: str
    year: int
    status: str
    archived_at: Optional[datetime]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    assigned_user: Optional[UserOut] = None

    class Config:
        from_attributes = True
