"""Field-level input predicates.

Each check takes the value, its constraints and the field name, and raises
:class:`FieldValidationError` naming the field when the constraint does not hold.
Checks never touch persistence, so callers run them before opening a transaction.
"""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Any

from email_validator import EmailNotValidError, validate_email

from recruitment.core.errors import FieldValidationError
from recruitment.types import STATUS_PATTERN

_ALPHANUMERIC_RE = re.compile(r"[A-Za-z0-9]+")
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_PNR_RE = re.compile(r"[0-9]{12}")


def _fail(message: str, name: str) -> None:
    raise FieldValidationError(message, field=name)


def is_length(value: Any, min_length: int, max_length: float, name: str) -> None:
    try:
        length = len(value)
    except TypeError:
        _fail(f"{name} must be between {min_length} and {max_length}", name)
    if length < min_length or length > max_length:
        _fail(f"{name} must be between {min_length} and {max_length}", name)


def is_numeric(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        _fail(f"{name} must be numerical", name)
    if isinstance(value, float) and not math.isfinite(value):
        _fail(f"{name} must be numerical", name)


def is_integer(value: Any, name: str) -> None:
    is_numeric(value, name)
    if isinstance(value, float) and not value.is_integer():
        _fail(f"{name} must be integer", name)


def is_positive_integer(value: Any, name: str) -> None:
    is_integer(value, name)
    if value < 0:
        _fail(f"{name} must be positive integer", name)


def is_string(value: Any, name: str) -> None:
    if not isinstance(value, str):
        _fail(f"{name} must be a string", name)


def is_alphanumeric(value: Any, name: str) -> None:
    is_string(value, name)
    if not _ALPHANUMERIC_RE.fullmatch(value):
        _fail(f"{name} must be alphanumeric", name)


def is_alpha(value: Any, name: str) -> None:
    is_string(value, name)
    if not value.isalpha():
        _fail(f"{name} must only contain letters", name)


def not_empty_string(value: Any, name: str) -> None:
    is_string(value, name)
    if value == "":
        _fail(f"{name} must be non-empty string", name)


def is_email(value: Any, name: str) -> None:
    is_string(value, name)
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        _fail(f"{name} must be a email string", name)


def is_array(value: Any, name: str) -> None:
    if not isinstance(value, (list, tuple)):
        _fail(f"{name} must be an array", name)


def is_date_string(value: Any, name: str) -> None:
    is_string(value, name)
    if not _ISO_DATE_RE.fullmatch(value):
        _fail(f"{name} must be a valid date format XXXX-XX-XX", name)
    try:
        date.fromisoformat(value)
    except ValueError:
        _fail(f"{name} must be a valid date format XXXX-XX-XX", name)


def matches(value: Any, pattern: str | re.Pattern[str], name: str) -> None:
    is_string(value, name)
    if not re.fullmatch(pattern, value):
        _fail(f"{name} must be valid status format", name)


def is_number_between(value: Any, min_value: float, max_value: float, name: str) -> None:
    is_numeric(value, name)
    if value < min_value or value > max_value:
        _fail(f"{name} must be between {min_value} and {max_value}", name)


# Composite checks shared by the account and application flows.


def is_username(value: Any, name: str = "username") -> None:
    is_string(value, name)
    is_length(value, 3, 30, name)
    is_alphanumeric(value, name)


def is_pnr(value: Any, name: str = "pnr") -> None:
    is_string(value, name)
    if not _PNR_RE.fullmatch(value):
        _fail(f"{name} must be 12 digits", name)


def is_person_name(value: Any, name: str) -> None:
    not_empty_string(value, name)
    is_length(value, 1, 255, name)
    is_alpha(value, name)


def is_status(value: Any, name: str = "status") -> None:
    matches(value, STATUS_PATTERN, name)
