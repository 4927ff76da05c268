"""Wire <-> model field mapping.

JSON bodies and query strings use camelCase (``bonusHealth``), models and
payload schemas use snake_case (``bonus_health``).
"""
from __future__ import annotations

import datetime as dt
import re
from collections.abc import Mapping
from typing import Any, Dict, Iterable

from pydantic import BaseModel, ConfigDict, ValidationInfo
from pydantic import ValidationError as SchemaError

from archive.errors import ValidationError
from .validators import UNSET

_UPPER_RE = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.title() for p in rest)


def to_snake(name: str) -> str:
    return _UPPER_RE.sub("_", name).lower()


class Payload(BaseModel):
    """Request body schema shared by every resource.

    Fields default to ``UNSET`` and their validators also run on the default,
    so a field that is required for the current operation (validation context
    ``{"required": True}``) fails with its own message when absent.
    Validators raise ``archive.errors.ValidationError``; it is not a
    ``ValueError``, so pydantic lets it through unchanged.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )

    id: Any = UNSET

    def provided(self) -> Dict[str, Any]:
        """Validated values of the fields present in the body, ``id`` excluded."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


def is_required(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get("required"))


def _schema_message(exc: SchemaError) -> str:
    errors = exc.errors()
    for err in errors:
        if err["type"] == "extra_forbidden":
            return f"Unknown field '{err['loc'][0]}'"
    return errors[0]["msg"]


def parse_payload(cls, data: Any, *, required: bool = False):
    """Validate a JSON object against ``cls``; absent fields stay unset."""
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")
    try:
        return cls.model_validate(dict(data), context={"required": required})
    except SchemaError as exc:
        raise ValidationError(_schema_message(exc)) from None


def _json_value(value: Any) -> Any:
    if isinstance(value, (dt.datetime, dt.date)):
        return value.isoformat()
    return value


def serialize_columns(row, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    skip = set(exclude)
    return {
        to_camel(col.key): _json_value(getattr(row, col.key))
        for col in row.__table__.columns
        if col.key not in skip
    }


def serialize_refs(rows) -> list:
    return [{"id": r.id, "name": r.name} for r in rows]
