# fleet/services/document_service.py
"""Vehicle documents, always addressed through their parent vehicle."""

from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from fleet.exceptions import NotFoundError
from fleet.models.vehicle import Vehicle
from fleet.models.vehicle_document import VehicleDocument
from fleet.schemas.document import DocumentIn
from fleet.services.file_storage import DOCUMENT, FileStorage, has_file
from fleet.services.pagination import paginate
from fleet.utils.logger import get_logger

logger = get_logger(__name__)

FILE_FIELD = "file"


def list_documents(db: Session, vehicle: Vehicle, page: int = 1) -> dict:
    q = db.query(VehicleDocument).filter(VehicleDocument.vehicle_id == vehicle.id)
    return paginate(q.order_by(VehicleDocument.id), page)


def get_document(db: Session, vehicle: Vehicle, document_id: int) -> VehicleDocument:
    """A document filed under another vehicle is reported as missing."""
    document = db.query(VehicleDocument).filter(VehicleDocument.id == document_id).first()
    if not document or document.vehicle_id != vehicle.id:
        raise NotFoundError("Document")
    return document


def create_document(db: Session, storage: FileStorage, vehicle: Vehicle, body: DocumentIn,
                    upload: Optional[UploadFile] = None) -> VehicleDocument:
    file_path = None
    if has_file(upload):
        storage.validate(upload, DOCUMENT, FILE_FIELD)
        file_path = storage.save(upload, DOCUMENT)

    now = datetime.utcnow()
    document = VehicleDocument(
        vehicle_id=vehicle.id,
        type=body.type.value,
        expiration_date=body.expiration_date,
        file_path=file_path,
        created_at=now,
        updated_at=now,
    )
    db.add(document)
    with storage.discard_on_error(file_path):
        db.commit()
    db.refresh(document)
    logger.info(f"[DOCUMENT] {document.type} added to vehicle {vehicle.id} (expires {document.expiration_date})")
    return document


def update_document(db: Session, storage: FileStorage, document: VehicleDocument, body: DocumentIn,
                    upload: Optional[UploadFile] = None) -> VehicleDocument:
    old_path, new_path = document.file_path, None
    if has_file(upload):
        storage.validate(upload, DOCUMENT, FILE_FIELD)
        new_path = storage.save(upload, DOCUMENT)
        document.file_path = new_path

    document.type = body.type.value
    document.expiration_date = body.expiration_date
    document.updated_at = datetime.utcnow()
    with storage.discard_on_error(new_path):
        db.commit()
    if new_path:
        storage.delete(old_path)
    db.refresh(document)
    return document


def delete_document(db: Session, storage: FileStorage, document: VehicleDocument):
    file_path = document.file_path
    db.delete(document)
    db.commit()
    storage.delete(file_path)


def expiring_documents(db: Session, vehicle: Vehicle, days: int, today: Optional[date] = None) -> list:
    """Documents expiring within `days`. Already-expired documents are included."""
    limit = (today or date.today()) + timedelta(days=days)
    return (
        db.query(VehicleDocument)
        .filter(VehicleDocument.vehicle_id == vehicle.id, VehicleDocument.expiration_date <= limit)
        .order_by(VehicleDocument.expiration_date)
        .all()
    )
