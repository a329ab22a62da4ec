"""Declarative description of a resource type."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel
from sqlalchemy.sql.elements import ColumnElement

from lorekeeper.core.access_control import Caller
from lorekeeper.core.pagination import PagePlan, SortField

DEFAULT_SORT_FIELDS: Mapping[str, SortField] = {
    "createdAt": SortField("createdAt", "created_at", datetime),
    "updatedAt": SortField("updatedAt", "updated_at", datetime),
    "name": SortField("name", "name", str),
}


def sort_fields(*extra: SortField, base: Mapping[str, SortField] = DEFAULT_SORT_FIELDS) -> dict:
    """Allow-list made of ``base`` plus ``extra`` fields."""
    fields = dict(base)
    fields.update({f.name: f for f in extra})
    return fields


@dataclass(frozen=True)
class RelationSpec:
    """Many-to-many link set from a list of ids in a write body.

    Attributes:
        field: Body field holding the ids (e.g. ``tag_ids``).
        attribute: ORM relationship it populates (e.g. ``tags``).
        model: Target ORM class.
        label: Human name used in error messages.
    """

    field: str
    attribute: str
    model: Any
    label: str


@dataclass(frozen=True)
class ReferenceSpec:
    """Single-valued foreign key set from a write body (e.g. ``race_id``)."""

    field: str
    model: Any
    label: str


@dataclass(frozen=True)
class ReferenceCheck:
    """Rows that must not exist for a resource to be deletable.

    Counted before deleting so the conflict is reported deterministically.
    """

    model: Any
    column: str
    label: str


@dataclass(frozen=True)
class UsageSource:
    """A column whose non-null values count as one use of the referenced resource."""

    table: Any
    column: str


@dataclass(frozen=True)
class ResourceDefinition:
    """Everything the shared template needs to serve one resource type.

    Attributes:
        name: Plural route and cache name (``tags``).
        label: Singular display name (``Tag``).
        model: ORM class.
        read_schema: Response schema.
        sort_fields: Allow-list for ``sortBy``.
        search_columns: Columns matched by ``search``.
        name_column: Display column used for uniqueness and rankings.
        unique_name: Whether names are unique per resource type.
        nullable_fields: Update fields that may be explicitly cleared.
        relations: Id-list links accepted on write.
        references: Single foreign keys accepted on write.
        delete_checks: Rows that block deletion.
        usage: Columns counted for the "most used" ranking.
    """

    name: str
    label: str
    model: Any
    read_schema: Type[BaseModel]
    sort_fields: Mapping[str, SortField] = field(default_factory=lambda: dict(DEFAULT_SORT_FIELDS))
    search_columns: Tuple[str, ...] = ("name", "description")
    name_column: str = "name"
    unique_name: bool = True
    nullable_fields: Tuple[str, ...] = ("description", "image_id")
    relations: Tuple[RelationSpec, ...] = ()
    references: Tuple[ReferenceSpec, ...] = ()
    delete_checks: Tuple[ReferenceCheck, ...] = ()
    usage: Tuple[UsageSource, ...] = ()

    @property
    def relation_fields(self) -> frozenset:
        """Body fields that carry relation ids."""
        return frozenset(spec.field for spec in self.relations)


@dataclass
class ListPlan:
    """A fully built list query handed to a repository.

    ``where`` already contains the business filters, the caller's security
    filter and the cursor continuation predicate. The remaining fields
    describe the same request for logging and for in-memory fakes.
    """

    where: ColumnElement[bool]
    order_by: List[ColumnElement]
    page: PagePlan
    caller: Optional[Caller] = None
    query: Optional[BaseModel] = None
    filters: Optional[BaseModel] = None

    @property
    def fetch_limit(self) -> int:
        """Rows to fetch: page size plus one."""
        return self.page.fetch_limit
