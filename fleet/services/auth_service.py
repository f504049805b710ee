# fleet/services/auth_service.py
"""
Registration, credential checks and personal access tokens.

Tokens are handed out as "<id>|<secret>"; only sha256(secret) is stored.
Logout revokes the presented token only.
"""

import hashlib
import hmac
import secrets
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from fleet.exceptions import ValidationError
from fleet.models.access_token import AccessToken
from fleet.models.user import User
from fleet.schemas.user import RegisterIn
from fleet.utils.logger import get_logger
from fleet.utils.validation import MAX_ID, MAX_ID_DIGITS

logger = get_logger(__name__)

TOKEN_NAME = "auth_token"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(user: User, password: str) -> bool:
    return check_password_hash(user.password, password)


def _digest(secret: str) -> str:
    return hashlib.sha256(secret.encode()).hexdigest()


def email_taken(db: Session, email: str, exclude_user_id: Optional[int] = None) -> bool:
    q = db.query(User).filter(User.email == email)
    if exclude_user_id is not None:
        q = q.filter(User.id != exclude_user_id)
    return q.first() is not None


def register_user(db: Session, body: RegisterIn) -> User:
    if email_taken(db, body.email):
        raise ValidationError.for_field("email", "The email has already been taken.")
    now = datetime.utcnow()
    user = User(
        name=body.name,
        email=body.email,
        password=hash_password(body.password),
        role=body.role.value,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"[AUTH] Registered user {user.id} ({user.role})")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user for valid credentials. The error never says which part was wrong."""
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user or not verify_password(user, password):
        logger.info("[AUTH] Failed login attempt")
        raise ValidationError.for_field("email", "The provided credentials are incorrect.")
    return user


def issue_token(db: Session, user: User, name: str = TOKEN_NAME) -> str:
    secret = secrets.token_hex(20)
    token = AccessToken(user_id=user.id, name=name, token=_digest(secret), created_at=datetime.utcnow())
    db.add(token)
    db.commit()
    return f"{token.id}|{secret}"


def resolve_token(db: Session, plain_token: str) -> Optional[AccessToken]:
    """Look up a presented bearer token. Returns None for anything malformed or unknown."""
    token_id, sep, secret = plain_token.partition("|")
    if not sep or not secret or not token_id.isascii() or not token_id.isdigit():
        return None
    if len(token_id) > MAX_ID_DIGITS or int(token_id) > MAX_ID:
        return None
    token = db.query(AccessToken).filter(AccessToken.id == int(token_id)).first()
    if not token or not hmac.compare_digest(token.token, _digest(secret)):
        return None
    token.last_used_at = datetime.utcnow()
    db.commit()
    return token


def revoke_token(db: Session, token: AccessToken):
    token_id, user_id = token.id, token.user_id
    db.delete(token)
    db.commit()
    logger.info(f"[AUTH] Revoked token {token_id} of user {user_id}")
