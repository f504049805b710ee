# fleet/schemas/document.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Optional
from fleet.models.vehicle_document import DocumentType


class DocumentIn(BaseModel):
    type: DocumentType
    expiration_date: date

    @field_validator("expiration_date")
    @classmethod
    def must_be_in_future(cls, value: date) -> date:
        if value <= date.today():
            raise ValueError("Expiration date must be in the future.")
        return value


class DocumentOut(BaseModel):
    id: int
    vehicle_id: int
    type: str
    expiration_date: date
    file_path: Optional[str]
    is_expired: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
