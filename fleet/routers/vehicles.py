# fleet/routers/vehicles.py
"""Vehicle CRUD, archive/restore, and the chauffeur's own vehicle."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fleet.database import get_db
from fleet.models.user import Role, User
from fleet.models.vehicle import VehicleStatus
from fleet.policies import vehicle_policy
from fleet.schemas.detail import VehicleDetail
from fleet.schemas.pagination import Page
from fleet.schemas.vehicle import VehicleIn, VehicleOut
from fleet.security import authorize, get_current_user, require_role
from fleet.services import vehicle_service
from fleet.utils.validation import PageNumber, RecordId

router = APIRouter()


@router.get("/vehicles", response_model=Page[VehicleOut], summary="List vehicles")
def list_vehicles(
    status: Optional[VehicleStatus] = None,
    search: Optional[str] = None,
    page: PageNumber = 1,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Filter by status, search registration number or model. 15 per page."""
    authorize(vehicle_policy.view_any(user))
    return vehicle_service.list_vehicles(db, status.value if status else None, search, page)


@router.post("/vehicles", status_code=201, summary="Create a vehicle")
def create_vehicle(body: VehicleIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    authorize(vehicle_policy.create(user))
    vehicle = vehicle_service.create_vehicle(db, body)
    return {"message": "Vehicle created successfully", "vehicle": VehicleOut.model_validate(vehicle)}


@router.get("/vehicles/{vehicle_id}", summary="Vehicle with documents, maintenances and exchanges")
def show_vehicle(vehicle_id: RecordId, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    vehicle = vehicle_service.get_vehicle(db, vehicle_id)
    authorize(vehicle_policy.view(user, vehicle))
    return {"vehicle": VehicleDetail.model_validate(vehicle)}


@router.put("/vehicles/{vehicle_id}", summary="Replace a vehicle's details")
def update_vehicle(vehicle_id: RecordId, body: VehicleIn, user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    vehicle = vehicle_service.get_vehicle(db, vehicle_id)
    authorize(vehicle_policy.update(user, vehicle))
    vehicle = vehicle_service.update_vehicle(db, vehicle, body)
    return {"message": "Vehicle updated successfully", "vehicle": VehicleOut.model_validate(vehicle)}


@router.delete("/vehicles/{vehicle_id}", summary="Remove a vehicle from service (archives it)")
def delete_vehicle(vehicle_id: RecordId, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Vehicles keep their history, so deleting one archives it."""
    vehicle = vehicle_service.get_vehicle(db, vehicle_id)
    authorize(vehicle_policy.delete(user, vehicle))
    vehicle_service.archive_vehicle(db, vehicle)
    return {"message": "Vehicle archived successfully"}


@router.post("/vehicles/{vehicle_id}/archive", summary="Archive a vehicle")
def archive_vehicle(vehicle_id: RecordId, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    vehicle = vehicle_service.get_vehicle(db, vehicle_id)
    authorize(vehicle_policy.archive(user, vehicle))
    vehicle = vehicle_service.archive_vehicle(db, vehicle)
    return {"message": "Vehicle archived successfully", "vehicle": VehicleOut.model_validate(vehicle)}


@router.post("/vehicles/{vehicle_id}/restore", summary="Put an archived vehicle back in service")
def restore_vehicle(vehicle_id: RecordId, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    vehicle = vehicle_service.get_vehicle(db, vehicle_id)
    authorize(vehicle_policy.restore(user, vehicle))
    vehicle = vehicle_service.restore_vehicle(db, vehicle)
    return {"message": "Vehicle restored successfully", "vehicle": VehicleOut.model_validate(vehicle)}


@router.get("/my-vehicle", summary="Vehicle assigned to the calling chauffeur")
def my_vehicle(user: User = Depends(require_role(Role.CHAUFFEUR))):
    vehicle = vehicle_service.get_assigned_vehicle(user)
    return {"vehicle": VehicleDetail.model_validate(vehicle)}
