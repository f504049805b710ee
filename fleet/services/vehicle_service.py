# fleet/services/vehicle_service.py
"""Vehicle queries and mutations used by the vehicles router."""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from fleet.exceptions import NotFoundError, ValidationError
from fleet.models.user import User
from fleet.models.vehicle import Vehicle
from fleet.schemas.vehicle import VehicleIn
from fleet.services.pagination import paginate
from fleet.utils.logger import get_logger

logger = get_logger(__name__)


def get_vehicle(db: Session, vehicle_id: int) -> Vehicle:
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if not vehicle:
        raise NotFoundError("Vehicle")
    return vehicle


def list_vehicles(db: Session, status: Optional[str] = None, search: Optional[str] = None, page: int = 1) -> dict:
    q = db.query(Vehicle)
    if status:
        q = q.filter(Vehicle.status == status)
    if search:
        pattern = f"%{search}%"
        q = q.filter(or_(Vehicle.registration_number.like(pattern), Vehicle.model.like(pattern)))
    return paginate(q.order_by(Vehicle.id), page)


def _check_registration_free(db: Session, registration_number: str, exclude_id: Optional[int] = None):
    q = db.query(Vehicle).filter(Vehicle.registration_number == registration_number)
    if exclude_id is not None:
        q = q.filter(Vehicle.id != exclude_id)
    if q.first():
        raise ValidationError.for_field("registration_number", "The registration number has already been taken.")


def create_vehicle(db: Session, body: VehicleIn) -> Vehicle:
    _check_registration_free(db, body.registration_number)
    now = datetime.utcnow()
    vehicle = Vehicle(
        registration_number=body.registration_number,
        model=body.model,
        year=body.year,
        status="active",
        created_at=now,
        updated_at=now,
    )
    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)
    logger.info(f"[VEHICLE] Created {vehicle.registration_number} (id={vehicle.id})")
    return vehicle


def update_vehicle(db: Session, vehicle: Vehicle, body: VehicleIn) -> Vehicle:
    _check_registration_free(db, body.registration_number, exclude_id=vehicle.id)
    vehicle.registration_number = body.registration_number
    vehicle.model = body.model
    vehicle.year = body.year
    vehicle.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(vehicle)
    return vehicle


def archive_vehicle(db: Session, vehicle: Vehicle) -> Vehicle:
    vehicle.archive()
    db.commit()
    db.refresh(vehicle)
    logger.info(f"[VEHICLE] Archived {vehicle.registration_number}")
    return vehicle


def restore_vehicle(db: Session, vehicle: Vehicle) -> Vehicle:
    vehicle.restore()
    db.commit()
    db.refresh(vehicle)
    logger.info(f"[VEHICLE] Restored {vehicle.registration_number}")
    return vehicle


def get_assigned_vehicle(user: User) -> Vehicle:
    if user.vehicle is None:
        raise NotFoundError(message="No vehicle assigned to you")
    return user.vehicle
