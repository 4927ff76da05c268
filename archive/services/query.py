"""Paginated, searchable, sortable listing shared by every ``get_many``."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from archive.config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from archive.errors import ValidationError
from .fields import to_snake
from .uow import unit_of_work
from .validators import _is_int

_SEARCH_KEY_RE = re.compile(r"^search\[(\w+)\]$")
DIRECTIONS = ("asc", "desc")


def _int_arg(args, key: str, default: int, label: str) -> int:
    raw = args.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer") from None


@dataclass
class ListParams:
    page: Any = DEFAULT_PAGE
    page_size: Any = DEFAULT_PAGE_SIZE
    search: Optional[Dict[str, Any]] = None
    order_by: Optional[Tuple[str, str]] = None

    @classmethod
    def from_args(cls, args) -> "ListParams":
        """Parse ``page``, ``pageSize``, ``search[<field>]`` and ``orderBy[...]`` from a query string."""
        page = _int_arg(args, "page", DEFAULT_PAGE, "Page number")
        page_size = _int_arg(args, "pageSize", DEFAULT_PAGE_SIZE, "Page size")
        search = {}
        for key, value in args.items():
            m = _SEARCH_KEY_RE.match(key)
            if m:
                search[m.group(1)] = value
        order_by = None
        field = args.get("orderBy[field]") or args.get("orderBy")
        if field:
            order_by = (field, (args.get("orderBy[direction]") or args.get("direction") or "asc").lower())
        return cls(page=page, page_size=page_size, search=search or None, order_by=order_by)

    def validate(self) -> None:
        if not _is_int(self.page) or self.page < 1:
            raise ValidationError("Page number must be greater than 0")
        if not _is_int(self.page_size) or not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


def _search_filters(model, search: Optional[Dict[str, Any]], searchable: Iterable[str]):
    allowed = set(searchable)
    conds = []
    for key, value in (search or {}).items():
        name = to_snake(key)
        if name not in allowed:
            raise ValidationError(f"Cannot search by '{key}'")
        if not isinstance(value, (str, int)) or isinstance(value, bool):
            raise ValidationError(f"Search value for '{key}' must be a string")
        conds.append(getattr(model, name).contains(str(value), autoescape=True))
    return conds


def _order_clause(model, order_by: Optional[Tuple[str, str]], default_order: str, sortable: Tuple[str, ...]):
    field, direction = order_by or (default_order, "asc")
    name = to_snake(field)
    column = model.__table__.columns.get(name)
    if name not in sortable or column is None:
        raise ValidationError(f"Cannot order by '{field}'")
    if direction not in DIRECTIONS:
        raise ValidationError("Order direction must be one of: asc, desc")
    return column.asc() if direction == "asc" else column.desc()


def paginate(
    session,
    query,
    model,
    params: ListParams,
    *,
    default_order: str,
    searchable: Iterable[str],
    sortable: Tuple[str, ...],
    serialize: Callable[[Any], Dict[str, Any]],
    check: Optional[Callable[[], Any]] = None,
) -> Dict[str, Any]:
    """Count and fetch one page inside a single unit of work.

    Every parameter is validated before the first query is issued. ``check``
    runs first inside the unit of work (e.g. to require a parent row).
    """
    params.validate()
    conds = _search_filters(model, params.search, searchable)
    order = _order_clause(model, params.order_by, default_order, sortable)
    query = query.filter(*conds)

    with unit_of_work(session):
        if check is not None:
            check()
        total = query.count()
        rows = (
            query.order_by(order, model.id.asc())
            .offset(params.offset)
            .limit(params.page_size)
            .all()
        )
        data = [serialize(r) for r in rows]

    return {
        "data": data,
        "pagination": {
            "page": params.page,
            "pageSize": params.page_size,
            "total": total,
            "totalPages": total_pages(total, params.page_size),
        },
    }
