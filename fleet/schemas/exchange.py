# fleet/schemas/exchange.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from fleet.schemas.user import UserOut
from fleet.schemas.vehicle import VehicleOut
from fleet.utils.validation import BodyId


class ExchangeCreate(BaseModel):
    to_driver_id: BodyId
    vehicle_id: BodyId
    note: Optional[str] = None


class ExchangeUpdate(BaseModel):
    note: Optional[str] = None


class ExchangeBrief(BaseModel):
    id: int
    from_driver_id: int
    to_driver_id: int
    vehicle_id: int
    request_date: datetime
    status: str
    before_photo_path: Optional[str]
    after_photo_path: Optional[str]
    note: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class ExchangeOut(ExchangeBrief):
    from_driver: UserOut
    to_driver: UserOut
    vehicle: VehicleOut
