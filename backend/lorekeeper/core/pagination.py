"""Keyset pagination over ``(sort field, id)``.

Each page is fetched with ``limit + 1`` rows ordered by the sort field and then
by id in the same direction, so duplicates in the sort field still yield a
total order. The extra row only signals that a next page exists.

A cursor is base64 of ``{"lastValue": ..., "lastId": ...}`` taken from the
last returned row. It is self-describing and never stored server-side; it is
only meaningful when replayed with the same sortBy/sortDir. Decoding fails
closed with a validation error.
"""

import base64
import binascii
import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import and_, func, or_
from sqlalchemy.sql.elements import ColumnElement

from lorekeeper.core.exceptions import ValidationException
from lorekeeper.core.shared_models import SortDirection
from lorekeeper.schemas.pagination import ListQuery, PaginationMeta

INVALID_CURSOR = "Invalid cursor"


@dataclass(frozen=True)
class SortField:
    """An allow-listed sort key.

    Attributes:
        name: Wire name accepted in ``sortBy`` (e.g. ``createdAt``).
        attribute: ORM attribute it resolves to (e.g. ``created_at``).
        kind: Python type of the values, used to validate decoded cursors.
        null_value: Substitute for NULL so nullable columns still order totally.
    """

    name: str
    attribute: str
    kind: type = str
    null_value: Any = None

    def expression(self, model: Any) -> ColumnElement:
        """Column expression used in ORDER BY and in the continuation predicate."""
        column = getattr(model, self.attribute)
        if self.null_value is None:
            return column
        return func.coalesce(column, self.null_value)

    def value_of(self, obj: Any) -> Any:
        """Sort value of a loaded row, mirroring ``expression``."""
        value = getattr(obj, self.attribute)
        if value is None:
            value = self.null_value
        if isinstance(value, Enum):
            value = value.value
        return value

    def coerce(self, raw: Any) -> Any:
        """Turn a decoded cursor value back into a comparable Python value."""
        if self.kind is datetime:
            if not isinstance(raw, str):
                raise ValueError("expected ISO timestamp")
            return datetime.fromisoformat(raw)
        if self.kind is int:
            if isinstance(raw, bool) or not isinstance(raw, int):
                raise ValueError("expected integer")
            return raw
        if self.kind is float:
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValueError("expected number")
            return float(raw)
        if not isinstance(raw, str):
            raise ValueError("expected string")
        return raw


@dataclass(frozen=True)
class CursorPosition:
    """Decoded cursor: the sort value and id of the last row already served."""

    last_value: Any
    last_id: UUID


@dataclass(frozen=True)
class PagePlan:
    """Everything a repository needs to order and cut one page."""

    sort_field: SortField
    direction: SortDirection
    limit: int
    cursor: Optional[str] = None
    position: Optional[CursorPosition] = None

    @property
    def fetch_limit(self) -> int:
        """Rows to request: one extra to detect a next page."""
        return self.limit + 1


def _wire_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


def encode_cursor(sort_field: SortField, obj: Any) -> str:
    """Mint a cursor pointing just past ``obj``."""
    payload = {"lastValue": _wire_value(sort_field.value_of(obj)), "lastId": str(obj.id)}
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def decode_cursor(cursor: str, sort_field: SortField) -> CursorPosition:
    """Decode a cursor minted under ``sort_field``.

    Raises:
        ValidationException: The cursor is not base64 JSON of
            ``{lastValue, lastId}`` or its value does not fit the sort field.
    """
    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        payload = json.loads(base64.urlsafe_b64decode(padded.encode()))
        if not isinstance(payload, dict) or set(payload) != {"lastValue", "lastId"}:
            raise ValueError("unexpected cursor shape")
        return CursorPosition(
            last_value=sort_field.coerce(payload["lastValue"]),
            last_id=UUID(str(payload["lastId"])),
        )
    except (binascii.Error, UnicodeDecodeError, ValueError, TypeError) as e:
        raise ValidationException(INVALID_CURSOR) from e


def resolve_sort_field(
    allowed: Mapping[str, SortField], sort_by: Optional[str], default: str = "createdAt"
) -> SortField:
    """Resolve ``sortBy`` through the resource's allow-list.

    Raises:
        ValidationException: If the field is not allowed.
    """
    key = sort_by or default
    try:
        return allowed[key]
    except KeyError:
        options = ", ".join(sorted(allowed))
        raise ValidationException(f"Invalid sortBy '{key}'. Allowed: {options}") from None


def plan_page(
    query: ListQuery, allowed: Mapping[str, SortField], default_sort: str = "createdAt"
) -> PagePlan:
    """Validate the sort and cursor parts of a list query."""
    sort_field = resolve_sort_field(allowed, query.sort_by, default_sort)
    position = decode_cursor(query.cursor, sort_field) if query.cursor else None
    return PagePlan(
        sort_field=sort_field,
        direction=query.sort_dir,
        limit=query.limit,
        cursor=query.cursor,
        position=position,
    )


def order_by(model: Any, plan: PagePlan) -> List[ColumnElement]:
    """ORDER BY clauses: the sort field, then id, both in the requested direction."""
    expr = plan.sort_field.expression(model)
    if plan.direction == SortDirection.DESC:
        return [expr.desc(), model.id.desc()]
    return [expr.asc(), model.id.asc()]


def continuation_predicate(model: Any, plan: PagePlan) -> Optional[ColumnElement[bool]]:
    """Predicate selecting rows strictly after the cursor position, or None without a cursor."""
    if plan.position is None:
        return None
    expr = plan.sort_field.expression(model)
    value, last_id = plan.position.last_value, plan.position.last_id
    if plan.direction == SortDirection.DESC:
        return or_(expr < value, and_(expr == value, model.id < last_id))
    return or_(expr > value, and_(expr == value, model.id > last_id))


def sort_key(plan: PagePlan, obj: Any) -> Tuple[Any, UUID]:
    """The ``(sort value, id)`` pair rows are ordered by."""
    return (plan.sort_field.value_of(obj), obj.id)


def is_after(plan: PagePlan, obj: Any) -> bool:
    """In-memory twin of ``continuation_predicate``."""
    if plan.position is None:
        return True
    key = sort_key(plan, obj)
    boundary = (plan.position.last_value, plan.position.last_id)
    if plan.direction == SortDirection.DESC:
        return key < boundary
    return key > boundary


def build_page(rows: Sequence[Any], plan: PagePlan) -> Tuple[List[Any], PaginationMeta]:
    """Cut a fetched batch of up to ``limit + 1`` rows into a page.

    ``hasPrev`` reports that a cursor was supplied; it does not verify that an
    earlier page exists.
    """
    has_next = len(rows) > plan.limit
    items = list(rows[: plan.limit])
    next_cursor = encode_cursor(plan.sort_field, items[-1]) if has_next and items else None
    meta = PaginationMeta(
        limit=plan.limit,
        has_next=has_next,
        has_prev=plan.cursor is not None,
        next_cursor=next_cursor,
        prev_cursor=plan.cursor,
    )
    return items, meta
