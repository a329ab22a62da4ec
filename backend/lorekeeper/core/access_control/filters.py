"""Security filter builder.

Turns a caller's identity into a WHERE-clause predicate that list queries AND
with their business filters, so rows the caller may not see are never
fetched. Post-filtering in memory is never used for access control.
"""

from typing import Any, Optional, Sequence

from sqlalchemy import and_, false, or_, true
from sqlalchemy.sql.elements import ColumnElement

from lorekeeper.core.access_control.caller import Caller, is_privileged
from lorekeeper.core.shared_models import UserRole, Visibility


def visibility_gate(model: Any, caller: Optional[Caller]) -> ColumnElement[bool]:
    """Predicate admitting exactly the rows ``can_view`` admits for a non-privileged caller.

    PUBLIC and HIDDEN rows always pass; PRIVATE rows pass only when owned by
    the caller. Anonymous callers can never match the PRIVATE branch.
    """
    open_rows = model.visibility.in_([Visibility.PUBLIC.value, Visibility.HIDDEN.value])
    if caller is None:
        return open_rows
    return or_(
        open_rows,
        and_(model.visibility == Visibility.PRIVATE.value, model.owner_id == caller.id),
    )


def build_security_filter(
    model: Any,
    business_filters: Sequence[ColumnElement[bool]],
    caller: Optional[Caller],
) -> ColumnElement[bool]:
    """Combine caller-independent business filters with the caller's visibility gate.

    Args:
        model: ORM class with ``visibility`` and ``owner_id`` columns.
        business_filters: Search, explicit visibility filter and the like.
        caller: The request identity, or None for anonymous.

    Returns:
        A single predicate. Privileged callers get the business filters unchanged.
    """
    clauses = list(business_filters)
    if not is_privileged(caller):
        clauses.append(visibility_gate(model, caller))
    return and_(true(), *clauses)


def build_user_security_filter(
    model: Any,
    business_filters: Sequence[ColumnElement[bool]],
    caller: Optional[Caller],
) -> ColumnElement[bool]:
    """Security filter for user accounts, which carry no visibility column.

    Anonymous callers see no account rows, ADMIN sees all of them, MODERATOR
    sees plain users plus their own row and USER sees only their own row.
    """
    clauses = list(business_filters)
    if caller is None:
        clauses.append(false())
    elif caller.role == UserRole.MODERATOR:
        clauses.append(or_(model.role == UserRole.USER.value, model.id == caller.id))
    elif caller.role != UserRole.ADMIN:
        clauses.append(model.id == caller.id)
    return and_(true(), *clauses)
