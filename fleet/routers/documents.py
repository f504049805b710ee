# fleet/routers/documents.py
"""Documents of one vehicle. Create/update take multipart form data with an optional `file`."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
from fleet.config import settings
from fleet.database import get_db
from fleet.models.vehicle import Vehicle
from fleet.schemas.document import DocumentIn, DocumentOut
from fleet.schemas.pagination import Page
from fleet.security import accessible_vehicle
from fleet.services import document_service
from fleet.services.file_storage import FileStorage, get_storage
from fleet.utils.validation import PageNumber, RecordId, validate_form

router = APIRouter(prefix="/vehicles/{vehicle_id}/documents")


@router.get("", response_model=Page[DocumentOut], summary="List a vehicle's documents")
def list_documents(page: PageNumber = 1, vehicle: Vehicle = Depends(accessible_vehicle),
                   db: Session = Depends(get_db)):
    return document_service.list_documents(db, vehicle, page)


@router.get("/expiring", summary="Documents expiring within N days (expired ones included)")
def expiring_documents(
    days: int = Query(settings.DEFAULT_EXPIRING_DAYS, ge=1, le=365),
    vehicle: Vehicle = Depends(accessible_vehicle),
    db: Session = Depends(get_db),
):
    documents = document_service.expiring_documents(db, vehicle, days)
    return {"documents": [DocumentOut.model_validate(d) for d in documents], "count": len(documents)}


@router.post("", status_code=status.HTTP_201_CREATED, summary="Add a document")
def create_document(
    doc_type: Optional[str] = Form(None, alias="type"),
    expiration_date: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    vehicle: Vehicle = Depends(accessible_vehicle),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_storage),
):
    body = validate_form(DocumentIn, type=doc_type, expiration_date=expiration_date)
    document = document_service.create_document(db, storage, vehicle, body, file)
    return {"message": "Document created successfully", "document": DocumentOut.model_validate(document)}


@router.get("/{document_id}", summary="Show a document")
def show_document(document_id: RecordId, vehicle: Vehicle = Depends(accessible_vehicle),
                  db: Session = Depends(get_db)):
    document = document_service.get_document(db, vehicle, document_id)
    return {"document": DocumentOut.model_validate(document)}


@router.put("/{document_id}", summary="Replace a document (a new file replaces the old one)")
def update_document(
    document_id: RecordId,
    doc_type: Optional[str] = Form(None, alias="type"),
    expiration_date: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    vehicle: Vehicle = Depends(accessible_vehicle),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_storage),
):
    document = document_service.get_document(db, vehicle, document_id)
    body = validate_form(DocumentIn, type=doc_type, expiration_date=expiration_date)
    document = document_service.update_document(db, storage, document, body, file)
    return {"message": "Document updated successfully", "document": DocumentOut.model_validate(document)}


@router.delete("/{document_id}", summary="Delete a document and its file")
def delete_document(document_id: RecordId, vehicle: Vehicle = Depends(accessible_vehicle),
                    db: Session = Depends(get_db), storage: FileStorage = Depends(get_storage)):
    document = document_service.get_document(db, vehicle, document_id)
    document_service.delete_document(db, storage, document)
    return {"message": "Document deleted successfully"}
