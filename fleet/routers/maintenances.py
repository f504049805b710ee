# fleet/routers/maintenances.py
"""Maintenance log of one vehicle. Create/update take multipart form data with an optional `invoice`."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
from fleet.config import settings
from fleet.database import get_db
from fleet.models.vehicle import Vehicle
from fleet.schemas.maintenance import MaintenanceIn, MaintenanceOut
from fleet.schemas.pagination import Page
from fleet.security import accessible_vehicle
from fleet.services import maintenance_service
from fleet.services.file_storage import FileStorage, get_storage
from fleet.utils.validation import PageNumber, RecordId, validate_form

router = APIRouter(prefix="/vehicles/{vehicle_id}/maintenances")


@router.get("", response_model=Page[MaintenanceOut], summary="List maintenance records, newest first")
def list_maintenances(page: PageNumber = 1, vehicle: Vehicle = Depends(accessible_vehicle),
                      db: Session = Depends(get_db)):
    return maintenance_service.list_maintenances(db, vehicle, page)


@router.get("/upcoming", summary="Reminders due between today and today + N days")
def upcoming_maintenances(
    days: int = Query(settings.DEFAULT_UPCOMING_DAYS, ge=1, le=365),
    vehicle: Vehicle = Depends(accessible_vehicle),
    db: Session = Depends(get_db),
):
    maintenances = maintenance_service.upcoming_maintenances(db, vehicle, days)
    return {"maintenances": [MaintenanceOut.model_validate(m) for m in maintenances], "count": len(maintenances)}


@router.post("", status_code=status.HTTP_201_CREATED, summary="Log a maintenance")
def create_maintenance(
    maintenance_type: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    reminder_date: Optional[str] = Form(None),
    invoice: Optional[UploadFile] = File(None),
    vehicle: Vehicle = Depends(accessible_vehicle),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_storage),
):
    body = validate_form(MaintenanceIn, maintenance_type=maintenance_type, description=description,
                         date=date, reminder_date=reminder_date)
    maintenance = maintenance_service.create_maintenance(db, storage, vehicle, body, invoice)
    return {"message": "Maintenance record created successfully",
            "maintenance": MaintenanceOut.model_validate(maintenance)}


@router.get("/{maintenance_id}", summary="Show a maintenance record")
def show_maintenance(maintenance_id: RecordId, vehicle: Vehicle = Depends(accessible_vehicle),
                     db: Session = Depends(get_db)):
    maintenance = maintenance_service.get_maintenance(db, vehicle, maintenance_id)
    return {"maintenance": MaintenanceOut.model_validate(maintenance)}


@router.put("/{maintenance_id}", summary="Replace a maintenance record (a new invoice replaces the old one)")
def update_maintenance(
    maintenance_id: RecordId,
    maintenance_type: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    reminder_date: Optional[str] = Form(None),
    invoice: Optional[UploadFile] = File(None),
    vehicle: Vehicle = Depends(accessible_vehicle),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_storage),
):
    maintenance = maintenance_service.get_maintenance(db, vehicle, maintenance_id)
    body = validate_form(MaintenanceIn, maintenance_type=maintenance_type, description=description,
                         date=date, reminder_date=reminder_date)
    maintenance = maintenance_service.update_maintenance(db, storage, maintenance, body, invoice)
    return {"message": "Maintenance record updated successfully",
            "maintenance": MaintenanceOut.model_validate(maintenance)}


@router.delete("/{maintenance_id}", summary="Delete a maintenance record and its invoice")
def delete_maintenance(maintenance_id: RecordId, vehicle: Vehicle = Depends(accessible_vehicle),
                       db: Session = Depends(get_db), storage: FileStorage = Depends(get_storage)):
    maintenance = maintenance_service.get_maintenance(db, vehicle, maintenance_id)
    maintenance_service.delete_maintenance(db, storage, maintenance)
    return {"message": "Maintenance record deleted successfully"}
