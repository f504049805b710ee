# fleet/services/user_service.py
"""
Admin-side user management.

Two rules guard this module: a vehicle is held by at most one user (checked
here and backed by the unique index on users.vehicle_id), and there is always
at least one admin left.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleet.exceptions import DomainRuleError, NotFoundError, ValidationError
from fleet.models.user import Role, User
from fleet.models.vehicle import Vehicle
from fleet.schemas.user import UserCreate, UserUpdate
from fleet.services import auth_service
from fleet.services.exchange_service import photo_paths
from fleet.services.file_storage import FileStorage
from fleet.services.pagination import paginate
from fleet.utils.logger import get_logger

logger = get_logger(__name__)

ALREADY_ASSIGNED = "Vehicle is already assigned to another user"
EMAIL_TAKEN = "The email has already been taken."


def list_users(db: Session, role: Optional[str] = None, search: Optional[str] = None, page: int = 1) -> dict:
    q = db.query(User)
    if role:
        q = q.filter(User.role == role)
    if search:
        pattern = f"%{search}%"
        q = q.filter(or_(User.name.like(pattern), User.email.like(pattern)))
    return paginate(q.order_by(User.id), page)


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User")
    return user


def admin_count(db: Session) -> int:
    return db.query(User).filter(User.role == Role.ADMIN.value).count()


def check_assignable(db: Session, vehicle_id: int, user_id: Optional[int] = None) -> Vehicle:
    """Raise unless vehicle_id exists, is active, and is not held by anyone but user_id."""
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if not vehicle:
        raise ValidationError.for_field("vehicle_id", "The selected vehicle id is invalid.")

    q = db.query(User).filter(User.vehicle_id == vehicle_id)
    if user_id is not None:
        q = q.filter(User.id != user_id)
    holder = q.first()
    if holder:
        raise DomainRuleError(ALREADY_ASSIGNED, extra={"assigned_to": holder.name})
    if vehicle.is_archived:
        raise DomainRuleError("Cannot assign an archived vehicle")
    return vehicle


def _commit(db: Session):
    # A concurrent request may have taken the email or vehicle between check and commit
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if "email" in str(e.orig):
            logger.warning("[USER] Email uniqueness lost a race with another request")
            raise ValidationError.for_field("email", EMAIL_TAKEN)
        logger.warning("[USER] Vehicle assignment lost a race with another request")
        raise DomainRuleError(ALREADY_ASSIGNED)


def create_user(db: Session, body: UserCreate) -> User:
    if auth_service.email_taken(db, body.email):
        raise ValidationError.for_field("email", EMAIL_TAKEN)
    if body.vehicle_id is not None:
        check_assignable(db, body.vehicle_id)

    now = datetime.utcnow()
    user = User(
        name=body.name,
        email=body.email,
        password=auth_service.hash_password(body.password),
        role=body.role.value,
        vehicle_id=body.vehicle_id,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    _commit(db)
    db.refresh(user)
    logger.info(f"[USER] Created user {user.id} ({user.role})")
    return user


def update_user(db: Session, user: User, body: UserUpdate) -> User:
    if auth_service.email_taken(db, body.email, exclude_user_id=user.id):
        raise ValidationError.for_field("email", EMAIL_TAKEN)
    if user.is_admin and body.role != Role.ADMIN and admin_count(db) <= 1:
        raise DomainRuleError("Cannot demote the last admin user")
    if body.vehicle_id is not None and body.vehicle_id != user.vehicle_id:
        check_assignable(db, body.vehicle_id, user_id=user.id)

    user.name = body.name
    user.email = body.email
    user.role = body.role.value
    user.vehicle_id = body.vehicle_id
    if body.password:
        user.password = auth_service.hash_password(body.password)
    user.updated_at = datetime.utcnow()
    _commit(db)
    db.refresh(user)
    return user


def delete_user(db: Session, storage: FileStorage, user: User):
    if user.is_admin and admin_count(db) <= 1:
        raise DomainRuleError("Cannot delete the last admin user")
    paths = [p for exchange in user.initiated_exchanges + user.received_exchanges for p in photo_paths(exchange)]
    user_id = user.id
    db.delete(user)
    db.commit()
    for path in paths:
        storage.delete(path)
    logger.info(f"[USER] Deleted user {user_id}")


def assign_vehicle(db: Session, user: User, vehicle_id: int) -> User:
    check_assignable(db, vehicle_id, user_id=user.id)
    user.vehicle_id = vehicle_id
    user.updated_at = datetime.utcnow()
    _commit(db)
    db.refresh(user)
    logger.info(f"[USER] Vehicle {vehicle_id} assigned to user {user.id}")
    return user
