# fleet/schemas/user.py
import re
from pydantic import AfterValidator, BaseModel, Field, ValidationInfo
from datetime import datetime
from typing import Annotated, Optional
from fleet.models.user import Role
from fleet.utils.validation import BodyId

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("The email field must be a valid email address.")
    return value.lower()


def _check_confirmation(value: Optional[str], info: ValidationInfo) -> Optional[str]:
    password = info.data.get("password")
    if password is not None and value != password:
        raise ValueError("The password field confirmation does not match.")
    return value


Email = Annotated[str, Field(max_length=255), AfterValidator(_check_email)]
Confirmation = Annotated[Optional[str], AfterValidator(_check_confirmation)]


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: str
    vehicle_id: Optional[int]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class RegisterIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: Email
    password: str = Field(min_length=8)
    password_confirmation: Confirmation = Field(default=None, validate_default=True)
    role: Role


class LoginIn(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserCreate(RegisterIn):
    vehicle_id: Optional[BodyId] = None


class UserUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: Email
    password: Optional[str] = Field(default=None, min_length=8)   # unchanged when omitted
    password_confirmation: Confirmation = Field(default=None, validate_default=True)
    role: Role
    vehicle_id: Optional[BodyId] = None


class AssignVehicleIn(BaseModel):
    vehicle_id: BodyId
