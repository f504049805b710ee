# fleet/services/exchange_service.py
"""
Vehicle exchange workflow.

A chauffeur asks to hand a vehicle over to another chauffeur; an admin then
approves or rejects the request. Decisions are final: status changes go
through VehicleExchange.move_to(), which only allows leaving pending.
"""

from datetime import datetime
from typing import Optional

from fastapi import UploadFile
from sqlalchemy import or_
from sqlalchemy.orm import Session

from fleet.exceptions import DomainRuleError, NotFoundError, PermissionDeniedError, ValidationError
from fleet.models.user import User
from fleet.models.vehicle import Vehicle
from fleet.models.vehicle_exchange import ExchangeStatus, VehicleExchange
from fleet.schemas.exchange import ExchangeCreate, ExchangeUpdate
from fleet.services.file_storage import PHOTO, FileStorage, has_file
from fleet.services.pagination import paginate
from fleet.utils.logger import get_logger

logger = get_logger(__name__)


def list_exchanges(db: Session, actor: User, status: Optional[str] = None, page: int = 1,
                   only_own: bool = False) -> dict:
    """Admins see every exchange; chauffeurs only those they sent or received."""
    q = db.query(VehicleExchange)
    if status:
        q = q.filter(VehicleExchange.status == status)
    if only_own or not actor.is_admin:
        q = q.filter(or_(VehicleExchange.from_driver_id == actor.id, VehicleExchange.to_driver_id == actor.id))
    return paginate(q.order_by(VehicleExchange.request_date.desc(), VehicleExchange.id.desc()), page)


def get_exchange(db: Session, exchange_id: int) -> VehicleExchange:
    exchange = db.query(VehicleExchange).filter(VehicleExchange.id == exchange_id).first()
    if not exchange:
        raise NotFoundError("Exchange")
    return exchange


def create_exchange(db: Session, storage: FileStorage, actor: User, body: ExchangeCreate,
                    before_photo: Optional[UploadFile] = None) -> VehicleExchange:
    if has_file(before_photo):
        storage.validate(before_photo, PHOTO, "before_photo")

    to_driver = db.query(User).filter(User.id == body.to_driver_id).first()
    if not to_driver:
        raise ValidationError.for_field("to_driver_id", "The selected to driver id is invalid.")
    if not db.query(Vehicle).filter(Vehicle.id == body.vehicle_id).first():
        raise ValidationError.for_field("vehicle_id", "The selected vehicle id is invalid.")
    if to_driver.id == actor.id:
        raise ValidationError.for_field("to_driver_id", "The to driver id must be another chauffeur.")
    if not to_driver.is_chauffeur:
        raise DomainRuleError("Target user must be a chauffeur")

    before_photo_path = storage.save(before_photo, PHOTO) if has_file(before_photo) else None

    now = datetime.utcnow()
    exchange = VehicleExchange(
        from_driver_id=actor.id,
        to_driver_id=to_driver.id,
        vehicle_id=body.vehicle_id,
        request_date=now,
        status=ExchangeStatus.PENDING.value,
        note=body.note,
        before_photo_path=before_photo_path,
        created_at=now,
        updated_at=now,
    )
    db.add(exchange)
    with storage.discard_on_error(before_photo_path):
        db.commit()
    db.refresh(exchange)
    logger.info(f"[EXCHANGE] #{exchange.id} requested: vehicle {exchange.vehicle_id} "
                f"from user {exchange.from_driver_id} to user {exchange.to_driver_id}")
    return exchange


def update_exchange(db: Session, storage: FileStorage, exchange: VehicleExchange, body: ExchangeUpdate,
                    after_photo: Optional[UploadFile] = None) -> VehicleExchange:
    old_path, new_path = exchange.after_photo_path, None
    if has_file(after_photo):
        storage.validate(after_photo, PHOTO, "after_photo")
        new_path = storage.save(after_photo, PHOTO)
        exchange.after_photo_path = new_path

    exchange.note = body.note
    exchange.updated_at = datetime.utcnow()
    with storage.discard_on_error(new_path):
        db.commit()
    if new_path:
        storage.delete(old_path)
    db.refresh(exchange)
    return exchange


def delete_exchange(db: Session, storage: FileStorage, exchange: VehicleExchange):
    if not exchange.is_pending:
        raise PermissionDeniedError("Cannot delete this exchange")
    paths = photo_paths(exchange)
    db.delete(exchange)
    db.commit()
    for path in paths:
        storage.delete(path)


def photo_paths(exchange: VehicleExchange) -> list:
    return [p for p in (exchange.before_photo_path, exchange.after_photo_path) if p]


def _decide(db: Session, exchange: VehicleExchange, target: ExchangeStatus) -> VehicleExchange:
    exchange.move_to(target)
    exchange.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(exchange)
    logger.info(f"[EXCHANGE] #{exchange.id} {exchange.status}")
    return exchange


def approve_exchange(db: Session, exchange: VehicleExchange) -> VehicleExchange:
    return _decide(db, exchange, ExchangeStatus.APPROVED)


def reject_exchange(db: Session, exchange: VehicleExchange) -> VehicleExchange:
    return _decide(db, exchange, ExchangeStatus.REJECTED)
