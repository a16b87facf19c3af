"""Shared validation utilities"""

import re
from datetime import datetime
from typing import Any, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Raises:
        ValueError: If email format is invalid
    """
    if email is None:
        return email

    email = email.strip()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")
    return email


def validate_date(value: str) -> str:
    """Require YYYY-MM-DD naming a real calendar date"""
    value = value.strip()
    if not DATE_PATTERN.match(value):
        raise ValueError("Invalid date format. Use YYYY-MM-DD")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValueError("Invalid date format. Use YYYY-MM-DD") from None
    return value


def validate_time(value: str) -> str:
    """Require HH:MM naming a real clock time"""
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Invalid time format. Use HH:MM")
    try:
        datetime.strptime(value, "%H:%M")
    except ValueError:
        raise ValueError("Invalid time format. Use HH:MM") from None
    return value


def require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


def parse_payload(model: type[ModelT], data: Any) -> ModelT:
    """
    Validate request data against a schema.

    The first pydantic error is turned into a ValidationError that names the
    offending field.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request data must be an object")

    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error.get("loc", ())) or None
        if error.get("type") == "missing":
            raise ValidationError(f"Missing required field: {field}", field=field) from None
        message = str(error.get("msg", "invalid value")).removeprefix("Value error, ")
        raise ValidationError(f"Invalid {field}: {message}", field=field) from None


def parse_id(value: Any, field: str = "id") -> int:
    """Coerce an id parameter to int"""
    if value is None or value == "":
        raise ValidationError(f"Missing required field: {field}", field=field)
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}: must be an integer", field=field)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: must be an integer", field=field) from None


def parse_flag(value: Any, default: bool = False) -> bool:
    """Interpret a boolean request parameter ("true", "0", 1, ...)"""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in ("1", "true", "yes", "on")
