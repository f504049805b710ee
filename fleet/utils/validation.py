# fleet/utils/validation.py
"""
Turns Pydantic validation errors into the {field: [messages]} map returned
to clients, and validates multipart form fields against a schema.
"""

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError
from fastapi import Path, Query
from typing import Annotated, Iterable, Type, TypeVar
from fleet.config import settings
from fleet.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "form"}


def error_map(errors: Iterable[dict]) -> dict[str, list[str]]:
    result: dict[str, list[str]] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOCATION_PREFIXES]
        field = ".".join(loc) or "request"
        message = err.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        result.setdefault(field, []).append(message)
    return result


def validate_form(schema: Type[SchemaT], **fields) -> SchemaT:
    """Build schema from form fields; fields left out of the form count as missing."""
    data = {name: value for name, value in fields.items() if value is not None and value != ""}
    try:
        return schema(**data)
    except PydanticValidationError as exc:
        raise ValidationError(error_map(exc.errors()))


# ── Id / page bounds ─────────────────────────────────────────────────────────
# Primary keys are 64-bit; anything larger can only be a bad request.
MAX_ID = 2 ** 63 - 1
MAX_ID_DIGITS = len(str(MAX_ID))

RecordId = Annotated[int, Path(le=MAX_ID)]
BodyId = Annotated[int, Field(le=MAX_ID)]
PageNumber = Annotated[int, Query(ge=1, le=MAX_ID // settings.PAGE_SIZE)]
