# fleet/routers/exchanges.py
"""
Vehicle exchange requests between chauffeurs.
Create/update take multipart form data (before_photo / after_photo are optional).
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session
from fleet.database import get_db
from fleet.models.user import Role, User
from fleet.models.vehicle_exchange import ExchangeStatus
from fleet.policies import exchange_policy
from fleet.schemas.exchange import ExchangeCreate, ExchangeOut, ExchangeUpdate
from fleet.schemas.pagination import Page
from fleet.security import authorize, get_current_user, require_role
from fleet.services import exchange_service
from fleet.services.file_storage import FileStorage, get_storage
from fleet.utils.validation import PageNumber, RecordId, validate_form

router = APIRouter()


@router.get("/exchanges", response_model=Page[ExchangeOut], summary="List exchanges, newest first")
def list_exchanges(
    status: Optional[ExchangeStatus] = None,
    page: PageNumber = 1,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Admins see all exchanges; chauffeurs see the ones they sent or received."""
    authorize(exchange_policy.view_any(user))
    return exchange_service.list_exchanges(db, user, status.value if status else None, page)


@router.post("/exchanges", status_code=201, summary="Request a vehicle exchange (chauffeurs)")
def create_exchange(
    to_driver_id: Optional[str] = Form(None),
    vehicle_id: Optional[str] = Form(None),
    note: Optional[str] = Form(None),
    before_photo: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_storage),
):
    authorize(exchange_policy.create(user))
    body = validate_form(ExchangeCreate, to_driver_id=to_driver_id, vehicle_id=vehicle_id, note=note)
    exchange = exchange_service.create_exchange(db, storage, user, body, before_photo)
    return {"message": "Vehicle exchange request created successfully",
            "exchange": ExchangeOut.model_validate(exchange)}


@router.get("/exchanges/{exchange_id}", summary="Show an exchange")
def show_exchange(exchange_id: RecordId, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    exchange = exchange_service.get_exchange(db, exchange_id)
    authorize(exchange_policy.view(user, exchange))
    return {"exchange": ExchangeOut.model_validate(exchange)}


@router.put("/exchanges/{exchange_id}", summary="Update note / after photo (initiator, while pending)")
def update_exchange(
    exchange_id: RecordId,
    note: Optional[str] = Form(None),
    after_photo: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_storage),
):
    exchange = exchange_service.get_exchange(db, exchange_id)
    authorize(exchange_policy.update(user, exchange), "Cannot update this exchange")
    body = validate_form(ExchangeUpdate, note=note)
    exchange = exchange_service.update_exchange(db, storage, exchange, body, after_photo)
    return {"message": "Exchange updated successfully", "exchange": ExchangeOut.model_validate(exchange)}


@router.delete("/exchanges/{exchange_id}", summary="Withdraw a pending exchange")
def delete_exchange(exchange_id: RecordId, user: User = Depends(get_current_user),
                    db: Session = Depends(get_db), storage: FileStorage = Depends(get_storage)):
    exchange = exchange_service.get_exchange(db, exchange_id)
    authorize(exchange_policy.delete(user, exchange), "Cannot delete this exchange")
    exchange_service.delete_exchange(db, storage, exchange)
    return {"message": "Exchange deleted successfully"}


@router.post("/exchanges/{exchange_id}/approve", summary="Approve a pending exchange (admins)")
def approve_exchange(exchange_id: RecordId, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    exchange = exchange_service.get_exchange(db, exchange_id)
    authorize(exchange_policy.approve(user))
    exchange = exchange_service.approve_exchange(db, exchange)
    return {"message": "Exchange approved successfully", "exchange": ExchangeOut.model_validate(exchange)}


@router.post("/exchanges/{exchange_id}/reject", summary="Reject a pending exchange (admins)")
def reject_exchange(exchange_id: RecordId, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    exchange = exchange_service.get_exchange(db, exchange_id)
    authorize(exchange_policy.reject(user))
    exchange = exchange_service.reject_exchange(db, exchange)
    return {"message": "Exchange rejected successfully", "exchange": ExchangeOut.model_validate(exchange)}


@router.get("/my-exchanges", response_model=Page[ExchangeOut], summary="Exchanges the calling chauffeur is part of")
def my_exchanges(page: PageNumber = 1, user: User = Depends(require_role(Role.CHAUFFEUR)),
                 db: Session = Depends(get_db)):
    return exchange_service.list_exchanges(db, user, page=page, only_own=True)
