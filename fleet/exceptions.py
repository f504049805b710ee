# fleet/exceptions.py
"""
Application exception hierarchy.

Services raise these; the handlers registered in fleet.main turn them into
JSON responses of the shape {"message": ..., "errors": {...}, ...extra}.

    FleetError (base)                 → 500
    ├── ValidationError               → 422  field-level error map
    ├── AuthenticationError           → 401
    ├── PermissionDeniedError         → 403
    ├── NotFoundError                 → 404
    ├── DomainRuleError               → 422  business rule violated
    │   └── InvalidTransitionError    → 422  exchange no longer pending
    └── FileStorageError              → 500
"""

from typing import Any, Dict, List, Optional


class FleetError(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(self, message: str = "An unexpected error occurred", extra: Optional[Dict[str, Any]] = None):
        self.message = message
        # Extra keys are merged into the response body next to "message"
        self.extra = extra or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body = {"message": self.message}
        body.update(self.extra)
        return body


class ValidationError(FleetError):
    """
    Client input failed validation. Carries an error map keyed by field name,
    each value a list of human-readable messages.
    """

    status_code = 422

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message or _summarise(errors))

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})


class AuthenticationError(FleetError):
    status_code = 401

    def __init__(self, message: str = "Unauthenticated."):
        super().__init__(message)


class PermissionDeniedError(FleetError):
    status_code = 403

    def __init__(self, message: str = "This action is unauthorized."):
        super().__init__(message)


class NotFoundError(FleetError):
    """
    Requested record does not exist, or exists under a different parent.
    Cross-parent lookups are reported as not-found rather than forbidden.
    """

    status_code = 404

    def __init__(self, resource: str = "Resource", message: Optional[str] = None):
        super().__init__(message or f"{resource} not found")


class DomainRuleError(FleetError):
    """A business rule rejected an otherwise well-formed request."""

    status_code = 422


class InvalidTransitionError(DomainRuleError):
    def __init__(self, message: str = "Exchange is not pending"):
        super().__init__(message)


class FileStorageError(FleetError):
    status_code = 500

    def __init__(self, message: str = "File storage operation failed"):
        super().__init__(message)


def _summarise(errors: Dict[str, List[str]]) -> str:
    """First message, plus a count of the rest: 'x is required. (and 2 more errors)'."""
    messages = [msg for msgs in errors.values() for msg in msgs]
    if not messages:
        return "The given data was invalid."
    first = messages[0]
    remaining = len(messages) - 1
    if remaining == 1:
        return f"{first} (and 1 more error)"
    if remaining > 1:
        return f"{first} (and {remaining} more errors)"
    return first
