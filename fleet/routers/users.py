# fleet/routers/users.py
"""User management. The whole router is admin-only."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fleet.database import get_db
from fleet.models.user import Role
from fleet.schemas.detail import UserDetail, UserWithVehicle
from fleet.schemas.pagination import Page
from fleet.schemas.user import AssignVehicleIn, UserCreate, UserUpdate
from fleet.security import require_role
from fleet.services import user_service
from fleet.services.file_storage import FileStorage, get_storage
from fleet.utils.validation import PageNumber, RecordId

router = APIRouter(dependencies=[Depends(require_role(Role.ADMIN))])


@router.get("/users", response_model=Page[UserWithVehicle], summary="List users")
def list_users(
    role: Optional[Role] = None,
    search: Optional[str] = None,
    page: PageNumber = 1,
    db: Session = Depends(get_db),
):
    """Filter by role, search name or email. 15 per page."""
    return user_service.list_users(db, role.value if role else None, search, page)


@router.post("/users", status_code=201, summary="Create a user")
def create_user(body: UserCreate, db: Session = Depends(get_db)):
    user = user_service.create_user(db, body)
    return {"message": "User created successfully", "user": UserWithVehicle.model_validate(user)}


@router.get("/users/{user_id}", summary="User with vehicle and exchanges")
def show_user(user_id: RecordId, db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    return {"user": UserDetail.model_validate(user)}


@router.put("/users/{user_id}", summary="Replace a user's details")
def update_user(user_id: RecordId, body: UserUpdate, db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    user = user_service.update_user(db, user, body)
    return {"message": "User updated successfully", "user": UserWithVehicle.model_validate(user)}


@router.delete("/users/{user_id}", summary="Delete a user (never the last admin)")
def delete_user(user_id: RecordId, db: Session = Depends(get_db), storage: FileStorage = Depends(get_storage)):
    user = user_service.get_user(db, user_id)
    user_service.delete_user(db, storage, user)
    return {"message": "User deleted successfully"}


@router.post("/users/{user_id}/assign-vehicle", summary="Assign a vehicle (one holder per vehicle)")
def assign_vehicle(user_id: RecordId, body: AssignVehicleIn, db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    user = user_service.assign_vehicle(db, user, body.vehicle_id)
    return {"message": "Vehicle assigned successfully", "user": UserWithVehicle.model_validate(user)}
