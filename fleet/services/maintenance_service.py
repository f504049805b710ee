# fleet/services/maintenance_service.py
"""Maintenance records, always addressed through their parent vehicle."""

from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from fleet.exceptions import NotFoundError
from fleet.models.maintenance import Maintenance
from fleet.models.vehicle import Vehicle
from fleet.schemas.maintenance import MaintenanceIn
from fleet.services.file_storage import INVOICE, FileStorage, has_file
from fleet.services.pagination import paginate
from fleet.utils.logger import get_logger

logger = get_logger(__name__)

INVOICE_FIELD = "invoice"


def list_maintenances(db: Session, vehicle: Vehicle, page: int = 1) -> dict:
    q = db.query(Maintenance).filter(Maintenance.vehicle_id == vehicle.id)
    return paginate(q.order_by(Maintenance.date.desc(), Maintenance.id.desc()), page)


def get_maintenance(db: Session, vehicle: Vehicle, maintenance_id: int) -> Maintenance:
    maintenance = db.query(Maintenance).filter(Maintenance.id == maintenance_id).first()
    if not maintenance or maintenance.vehicle_id != vehicle.id:
        raise NotFoundError("Maintenance record")
    return maintenance


def create_maintenance(db: Session, storage: FileStorage, vehicle: Vehicle, body: MaintenanceIn,
                       upload: Optional[UploadFile] = None) -> Maintenance:
    invoice_path = None
    if has_file(upload):
        storage.validate(upload, INVOICE, INVOICE_FIELD)
        invoice_path = storage.save(upload, INVOICE)

    now = datetime.utcnow()
    maintenance = Maintenance(
        vehicle_id=vehicle.id,
        maintenance_type=body.maintenance_type,
        description=body.description,
        date=body.date,
        reminder_date=body.reminder_date,
        invoice_path=invoice_path,
        created_at=now,
        updated_at=now,
    )
    db.add(maintenance)
    with storage.discard_on_error(invoice_path):
        db.commit()
    db.refresh(maintenance)
    logger.info(f"[MAINTENANCE] {maintenance.maintenance_type} logged for vehicle {vehicle.id}")
    return maintenance


def update_maintenance(db: Session, storage: FileStorage, maintenance: Maintenance, body: MaintenanceIn,
                       upload: Optional[UploadFile] = None) -> Maintenance:
    old_path, new_path = maintenance.invoice_path, None
    if has_file(upload):
        storage.validate(upload, INVOICE, INVOICE_FIELD)
        new_path = storage.save(upload, INVOICE)
        maintenance.invoice_path = new_path

    maintenance.maintenance_type = body.maintenance_type
    maintenance.description = body.description
    maintenance.date = body.date
    maintenance.reminder_date = body.reminder_date
    maintenance.updated_at = datetime.utcnow()
    with storage.discard_on_error(new_path):
        db.commit()
    if new_path:
        storage.delete(old_path)
    db.refresh(maintenance)
    return maintenance


def delete_maintenance(db: Session, storage: FileStorage, maintenance: Maintenance):
    invoice_path = maintenance.invoice_path
    db.delete(maintenance)
    db.commit()
    storage.delete(invoice_path)


def upcoming_maintenances(db: Session, vehicle: Vehicle, days: int, today: Optional[date] = None) -> list:
    """Reminders falling between today and today + days, both ends included."""
    today = today or date.today()
    return (
        db.query(Maintenance)
        .filter(
            Maintenance.vehicle_id == vehicle.id,
            Maintenance.reminder_date.isnot(None),
            Maintenance.reminder_date >= today,
            Maintenance.reminder_date <= today + timedelta(days=days),
        )
        .order_by(Maintenance.reminder_date)
        .all()
    )
