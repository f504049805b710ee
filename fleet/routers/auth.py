# fleet/routers/auth.py
"""Register, log in, log out, and who-am-I."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fleet.database import get_db
from fleet.models.access_token import AccessToken
from fleet.models.user import User
from fleet.schemas.detail import UserWithVehicle
from fleet.schemas.user import LoginIn, RegisterIn, UserOut
from fleet.security import get_current_token, get_current_user
from fleet.services import auth_service
from fleet.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Register a new user")
def register(body: RegisterIn, db: Session = Depends(get_db)):
    """Creates the account and immediately issues a bearer token."""
    user = auth_service.register_user(db, body)
    token = auth_service.issue_token(db, user)
    return {"message": "User registered successfully", "user": UserOut.model_validate(user), "token": token}


@router.post("/login", summary="Exchange email + password for a bearer token")
def login(body: LoginIn, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, body.email, body.password)
    token = auth_service.issue_token(db, user)
    logger.info(f"[AUTH] User {user.id} logged in")
    return {"message": "Login successful", "user": UserOut.model_validate(user), "token": token}


@router.post("/logout", summary="Revoke the presented token")
def logout(token: AccessToken = Depends(get_current_token), db: Session = Depends(get_db)):
    auth_service.revoke_token(db, token)
    return {"message": "Logged out successfully"}


@router.get("/user", summary="Current user with assigned vehicle")
def current_user(user: User = Depends(get_current_user)):
    return {"user": UserWithVehicle.model_validate(user)}
