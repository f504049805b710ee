# fleet/security.py
"""
Request-scoped authentication and authorization dependencies.

Every protected route runs: bearer token → current user → (optional) role gate,
then the handler checks the per-record policy with authorize(). Both the role
gate and the policy must pass.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fleet.database import get_db
from fleet.exceptions import AuthenticationError, PermissionDeniedError
from fleet.models.access_token import AccessToken
from fleet.models.user import Role, User
from fleet.policies import vehicle_policy
from fleet.services import auth_service, vehicle_service
from fleet.utils.validation import RecordId

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> AccessToken:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    token = auth_service.resolve_token(db, credentials.credentials)
    if token is None:
        raise AuthenticationError()
    return token


def get_current_user(token: AccessToken = Depends(get_current_token)) -> User:
    return token.user


def require_role(*roles: Role):
    """Coarse route-group gate, e.g. Depends(require_role(Role.ADMIN))."""
    allowed = {role.value for role in roles}

    def _check(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise PermissionDeniedError()
        return user

    return _check


def authorize(allowed: bool, message: str = "This action is unauthorized."):
    if not allowed:
        raise PermissionDeniedError(message)


def accessible_vehicle(vehicle_id: RecordId, user: User = Depends(get_current_user),
                       db: Session = Depends(get_db)):
    """Parent-vehicle lookup for nested routes; requires per-vehicle view access."""
    vehicle = vehicle_service.get_vehicle(db, vehicle_id)
    authorize(vehicle_policy.view(user, vehicle))
    return vehicle
