"""Field-level input checks shared by every resource service.

Each validator takes the raw value, a human label used in error messages and
the field's constraints. It returns the sanitized value, ``UNSET`` when the
field was not supplied, or raises ``ValidationError``. Nothing here touches
the database, so services can validate a whole payload before mutating.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, List, Optional, Pattern

from archive.config import ATTRIBUTE_RANGE, MIN_PASSWORD_LENGTH, MIN_RESOURCE
from archive.errors import ValidationError


class _Unset:
    """Marker for a field absent from the payload (distinct from ``None``)."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_ID_RE = re.compile(r"^[1-9]\d*$")


def _is_int(value: Any) -> bool:
    # bool is an int subclass; JSON true/false must not pass as 1/0
    return isinstance(value, int) and not isinstance(value, bool)


def _describe_range(minimum: Optional[int], maximum: Optional[int]) -> str:
    if minimum is not None and maximum is not None:
        return f"an integer between {minimum} and {maximum}"
    if minimum == 0:
        return "a non-negative integer"
    if minimum is not None:
        return f"an integer of at least {minimum}"
    if maximum is not None:
        return f"an integer of at most {maximum}"
    return "an integer"


def validate_name(
    value: Any,
    label: str,
    *,
    max_length: int,
    required: bool = False,
    min_length: int = 1,
    pattern: Optional[Pattern] = None,
    pattern_hint: str = "has an invalid format",
):
    if value is UNSET:
        if required:
            raise ValidationError(f"{label} is required and must be a string")
        return UNSET
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{label} cannot be empty")
    if not min_length <= len(trimmed) <= max_length:
        if min_length > 1:
            raise ValidationError(f"{label} must be between {min_length} and {max_length} characters")
        raise ValidationError(f"{label} cannot exceed {max_length} characters")
    if pattern is not None and not pattern.match(trimmed):
        raise ValidationError(f"{label} {pattern_hint}")
    return trimmed


def validate_text(value: Any, label: str, *, max_length: Optional[int] = None):
    """Optional free text: trimmed, and an empty string collapses to ``None``."""
    if value is UNSET:
        return UNSET
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    trimmed = value.strip()
    if max_length is not None and len(trimmed) > max_length:
        raise ValidationError(f"{label} cannot exceed {max_length} characters")
    return trimmed or None


def validate_int(
    value: Any,
    label: str,
    *,
    required: bool = False,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
):
    if value is UNSET:
        if required:
            raise ValidationError(f"{label} is required")
        return UNSET
    if (
        not _is_int(value)
        or (minimum is not None and value < minimum)
        or (maximum is not None and value > maximum)
    ):
        raise ValidationError(f"{label} must be {_describe_range(minimum, maximum)}")
    return value


def validate_attribute(value: Any, label: str, required: bool = False):
    lo, hi = ATTRIBUTE_RANGE
    return validate_int(value, label, required=required, minimum=lo, maximum=hi)


def validate_resource(value: Any, label: str, required: bool = False):
    return validate_int(value, label, required=required, minimum=MIN_RESOURCE)


def validate_positive_id(value: Any, label: str, required: bool = False):
    if value is UNSET:
        if required:
            raise ValidationError(f"{label} is required")
        return UNSET
    if not _is_int(value) or value <= 0:
        raise ValidationError(f"{label} must be a positive integer")
    return value


def validate_optional_id(value: Any, label: str):
    """Foreign key that may be cleared with ``None`` (equipment slots)."""
    if value is None:
        return None
    return validate_positive_id(value, label)


def validate_bool(value: Any, label: str, required: bool = False):
    if value is UNSET:
        if required:
            raise ValidationError(f"{label} is required")
        return UNSET
    if not isinstance(value, bool):
        raise ValidationError(f"{label} must be a boolean")
    return value


def validate_choice(value: Any, label: str, choices: Iterable[str], required: bool = False):
    choices = tuple(choices)
    if value is UNSET:
        if required:
            raise ValidationError(f"{label} is required")
        return UNSET
    if value not in choices:
        raise ValidationError(f"{label} must be one of: {', '.join(choices)}")
    return value


def validate_email(value: Any, label: str = "User email", required: bool = False):
    if value is UNSET:
        if required:
            raise ValidationError(f"{label} is required and must be a string")
        return UNSET
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    email = value.strip().lower()
    if not email:
        raise ValidationError(f"{label} cannot be empty")
    if not EMAIL_RE.match(email):
        raise ValidationError(f"{label} must be a valid email address")
    return email


def validate_password(value: Any, label: str = "User password", required: bool = False):
    if value is UNSET:
        if required:
            raise ValidationError(f"{label} is required and must be a string")
        return UNSET
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"{label} must be at least {MIN_PASSWORD_LENGTH} characters long")
    return value


def validate_id_list(values: Any, label: str) -> List[int]:
    """List of positive ids, de-duplicated in first-seen order."""
    if not isinstance(values, list):
        raise ValidationError(f"{label} IDs must be an array")
    out: List[int] = []
    for v in values:
        if not _is_int(v) or v <= 0:
            raise ValidationError(f"{label} ID {v} must be a positive integer")
        if v not in out:
            out.append(v)
    return out


def parse_id(raw: Any, entity: str) -> int:
    """Path or payload identifier: ``"0"``, ``"-1"`` and ``"abc"`` are all rejected."""
    if _is_int(raw) and raw > 0:
        return raw
    if isinstance(raw, str) and _ID_RE.match(raw):
        return int(raw)
    raise ValidationError(f"{entity} ID must be a positive integer")
