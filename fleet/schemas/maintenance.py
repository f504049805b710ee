# fleet/schemas/maintenance.py
import datetime as dt
from pydantic import BaseModel, Field, field_validator, ValidationInfo
from typing import Optional


class MaintenanceIn(BaseModel):
    maintenance_type: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    date: dt.date
    reminder_date: Optional[dt.date] = None

    @field_validator("reminder_date")
    @classmethod
    def after_service_date(cls, value: Optional[dt.date], info: ValidationInfo) -> Optional[dt.date]:
        service_date = info.data.get("date")
        if value is not None and service_date is not None and value <= service_date:
            raise ValueError("The reminder date must be a date after date.")
        return value


class MaintenanceOut(BaseModel):
    id: int
    vehicle_id: int
    maintenance_type: str
    description: str
    date: dt.date
    reminder_date: Optional[dt.date]
    invoice_path: Optional[str]
    is_reminder_due: bool
    created_at: Optional[dt.datetime]
    updated_at: Optional[dt.datetime]

    class Config:
        from_attributes = True
