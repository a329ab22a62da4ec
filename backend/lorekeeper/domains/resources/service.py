"""Resource service: the shared template behind every ownable resource.

Each operation follows the same ordering:

    get_by_id  fetch -> can_view (else NOT_FOUND) -> mask
    list       allow-list sort -> decode cursor -> business filters AND
               security filter AND continuation -> fetch limit+1 -> mask
    create     can_create -> uniqueness -> references -> insert
    update     fetch -> can_view (else NOT_FOUND) -> can_modify (else
               FORBIDDEN) -> uniqueness -> references -> write
    delete     fetch -> can_view -> can_modify -> reference checks -> delete
    get_stats  privileged only

Writes run inside one ``UnitOfWork`` and drop every cached anonymous list
page of the resource afterwards.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from lorekeeper.api.context import ApiContext
from lorekeeper.core.access_control import (
    build_security_filter,
    can_create,
    can_modify,
    can_view,
    mask,
)
from lorekeeper.core.config import Settings
from lorekeeper.core.exceptions import PermissionException, ValidationException
from lorekeeper.core.pagination import build_page, continuation_predicate, order_by, plan_page
from lorekeeper.core.protocols import ListCache, list_cache_key, list_cache_prefix
from lorekeeper.db.unit_of_work import UnitOfWork
from lorekeeper.domains.resources.exceptions import (
    NameAlreadyExistsError,
    ReferenceNotFoundError,
    ResourceForbiddenError,
    ResourceNotFoundError,
    ResourceReferencedError,
)
from lorekeeper.domains.resources.protocols import (
    ResourceRepositoryProtocol,
    ResourceServiceProtocol,
)
from lorekeeper.domains.resources.types import ListPlan, ResourceDefinition
from lorekeeper.schemas.pagination import ListQuery, Page
from lorekeeper.schemas.stats import NEW_WINDOW_DAYS, ResourceStats

ReadT = TypeVar("ReadT", bound=BaseModel)

STATS_FORBIDDEN = "Only administrators and moderators can view statistics"


def column_values(data: Dict[str, Any]) -> Dict[str, Any]:
    """Unwrap enum members so values can be written to string columns."""
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in data.items()}


def range_conditions(
    model: Any, filters: BaseModel, bounds: Dict[str, str]
) -> List[ColumnElement[bool]]:
    """Inclusive min/max predicates for ``{column: filter_suffix}`` pairs.

    Raises:
        ValidationException: If a minimum exceeds its maximum.
    """
    conditions: List[ColumnElement[bool]] = []
    for column_name, suffix in bounds.items():
        low = getattr(filters, f"min_{suffix}", None)
        high = getattr(filters, f"max_{suffix}", None)
        if low is not None and high is not None and low > high:
            raise ValidationException(f"min_{suffix} cannot exceed max_{suffix}")
        column = getattr(model, column_name)
        if low is not None:
            conditions.append(column >= low)
        if high is not None:
            conditions.append(column <= high)
    return conditions


class ResourceService(ResourceServiceProtocol, Generic[ReadT]):
    """Generic read/list/write/stats service configured by a ``ResourceDefinition``.

    Subclasses narrow behaviour through a few hooks:
        business_conditions  resource-specific list filters
        validate_write       extra checks before insert/update
        to_read              ORM row -> response schema
    """

    def __init__(
        self,
        definition: ResourceDefinition,
        repo: ResourceRepositoryProtocol,
        list_cache: ListCache,
        settings: Settings,
    ) -> None:
        """Initialize with injected dependencies."""
        self.definition = definition
        self._repo = repo
        self._cache = list_cache
        self._settings = settings

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_by_id(self, db: AsyncSession, id: UUID, *, ctx: ApiContext) -> ReadT:
        """Get one resource, masked for the caller.

        Raises:
            ResourceNotFoundError: If absent or PRIVATE and not viewable.
        """
        db_obj = await self._get_viewable(db, id, ctx)
        return mask(self.to_read(db_obj), ctx.caller)

    async def list(
        self,
        db: AsyncSession,
        query: ListQuery,
        *,
        ctx: ApiContext,
        filters: Optional[BaseModel] = None,
    ) -> Page[ReadT]:
        """List resources visible to the caller.

        Anonymous pages are served from and stored in the list cache; pages
        for authenticated callers are always computed. The cache generation
        is read before the query, so a page computed across a write is never
        stored.
        """
        cache_key = None
        generation = None
        if ctx.is_anonymous:
            cache_key = self._cache_key(query, filters)
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return cached
            generation = await self._cache.generation(cache_key)

        page_plan = plan_page(query, self.definition.sort_fields)
        model = self.definition.model
        where = build_security_filter(
            model, self.business_conditions(query, filters), ctx.caller
        )
        continuation = continuation_predicate(model, page_plan)
        if continuation is not None:
            where = and_(where, continuation)

        plan = ListPlan(
            where=where,
            order_by=order_by(model, page_plan),
            page=page_plan,
            caller=ctx.caller,
            query=query,
            filters=filters,
        )
        rows = await self._repo.find_many(db, plan)
        items, meta = build_page(rows, page_plan)
        page = Page[self.definition.read_schema](  # type: ignore[name-defined]
            items=[mask(self.to_read(row), ctx.caller) for row in items],
            pagination=meta,
        )

        if cache_key is not None:
            await self._cache.set(cache_key, page, generation=generation)
        return page

    def business_conditions(
        self, query: ListQuery, filters: Optional[BaseModel]
    ) -> List[ColumnElement[bool]]:
        """Caller-independent predicates: search, visibility and owner."""
        model = self.definition.model
        conditions: List[ColumnElement[bool]] = []
        if query.search:
            columns = [getattr(model, c) for c in self.definition.search_columns]
            conditions.append(
                _any([c.icontains(query.search, autoescape=True) for c in columns])
            )
        if query.visibility is not None:
            conditions.append(model.visibility == query.visibility.value)
        if query.owner_id is not None:
            conditions.append(model.owner_id == query.owner_id)
        return conditions

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, db: AsyncSession, obj_in: BaseModel, *, ctx: ApiContext) -> ReadT:
        """Create a resource.

        The owner is the caller unless a privileged caller names another one.

        Raises:
            PermissionException: Anonymous caller, or a non-privileged caller
                naming another owner.
            NameAlreadyExistsError: If the name is taken.
            ReferenceNotFoundError: If a referenced id is missing or not viewable.
        """
        owner_id = getattr(obj_in, "owner_id", None)
        if not can_create(ctx.caller, owner_id):
            if ctx.is_anonymous:
                raise PermissionException(f"Authentication required to create a {self._noun}")
            raise PermissionException(
                f"Only administrators and moderators can create a {self._noun} for another user"
            )

        data = self.create_values(obj_in)
        data["owner_id"] = owner_id or ctx.caller.id
        link_ids = {f: getattr(obj_in, f) for f in self.definition.relation_fields}

        async with UnitOfWork(db) as uow:
            await self._ensure_name_available(uow.session, data.get(self.definition.name_column))
            await self._check_references(uow.session, data, ctx)
            relations = await self._resolve_relations(uow.session, link_ids, ctx)
            await self.validate_write(uow.session, data, ctx, existing=None)
            db_obj = await self._repo.create(
                uow.session, obj_in=column_values(data), relations=relations
            )

        await self._invalidate(ctx)
        ctx.logger.info(f"Created {self._noun} {db_obj.id}")
        return mask(self.to_read(db_obj), ctx.caller)

    async def update(
        self, db: AsyncSession, id: UUID, obj_in: BaseModel, *, ctx: ApiContext
    ) -> ReadT:
        """Apply a partial update. Ownership never changes.

        Raises:
            ResourceNotFoundError: If absent or not viewable.
            ResourceForbiddenError: If viewable but not modifiable.
            NameAlreadyExistsError: If renamed onto a taken name.
            ReferenceNotFoundError: If a referenced id is missing or not viewable.
        """
        patch = obj_in.model_dump(exclude_unset=True)
        patch.pop("owner_id", None)
        link_ids = {
            f: patch.pop(f) for f in self.definition.relation_fields if f in patch
        }
        for field in [k for k, v in patch.items() if v is None]:
            if field not in self.definition.nullable_fields:
                raise ValidationException(f"{field} cannot be null")

        async with UnitOfWork(db) as uow:
            db_obj = await self._get_modifiable(
                uow.session, id, ctx, action="update", with_relations=bool(link_ids)
            )
            new_name = patch.get(self.definition.name_column)
            if new_name is not None:
                await self._ensure_name_available(uow.session, new_name, exclude_id=db_obj.id)
            await self._check_references(uow.session, patch, ctx)
            relations = await self._resolve_relations(uow.session, link_ids, ctx)
            await self.validate_write(uow.session, patch, ctx, existing=db_obj)
            db_obj = await self._repo.update(
                uow.session, db_obj=db_obj, obj_in=column_values(patch), relations=relations
            )

        await self._invalidate(ctx)
        ctx.logger.info(f"Updated {self._noun} {id}")
        return mask(self.to_read(db_obj), ctx.caller)

    async def delete(self, db: AsyncSession, id: UUID, *, ctx: ApiContext) -> None:
        """Delete a resource.

        Raises:
            ResourceNotFoundError: If absent or not viewable.
            ResourceForbiddenError: If viewable but not modifiable.
            ResourceInUseException: If other rows still reference it.
        """
        async with UnitOfWork(db) as uow:
            db_obj = await self._get_modifiable(uow.session, id, ctx, action="delete")
            references = await self._repo.count_references(uow.session, id)
            for referenced_by, count in references.items():
                if count:
                    raise ResourceReferencedError(self.definition.label, count, referenced_by)
            await self._repo.delete(uow.session, db_obj=db_obj)

        await self._invalidate(ctx)
        ctx.logger.info(f"Deleted {self._noun} {id}")

    def create_values(self, obj_in: BaseModel) -> Dict[str, Any]:
        """Column values for a new row, without relation ids or owner."""
        return obj_in.model_dump(exclude=set(self.definition.relation_fields) | {"owner_id"})

    async def validate_write(
        self,
        db: AsyncSession,
        data: Dict[str, Any],
        ctx: ApiContext,
        *,
        existing: Optional[Any],
    ) -> None:
        """Hook for resource-specific write checks. ``existing`` is None on create."""

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    async def get_stats(self, db: AsyncSession, *, ctx: ApiContext) -> ResourceStats:
        """Aggregate statistics over every row regardless of visibility.

        Raises:
            PermissionException: If the caller is not ADMIN or MODERATOR.
        """
        if not ctx.is_privileged:
            raise PermissionException(STATS_FORBIDDEN)
        since = datetime.now(timezone.utc) - timedelta(days=NEW_WINDOW_DAYS)
        return await self._repo.aggregate_stats(db, since=since, top_n=self._settings.STATS_TOP_N)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def to_read(self, db_obj: Any) -> ReadT:
        """Convert an ORM row into the response schema."""
        return self.definition.read_schema.model_validate(db_obj, from_attributes=True)

    @property
    def _noun(self) -> str:
        return self.definition.label.lower()

    async def _get_viewable(
        self, db: AsyncSession, id: UUID, ctx: ApiContext, *, with_relations: bool = False
    ) -> Any:
        db_obj = await self._repo.get(db, id, with_relations=with_relations)
        if db_obj is None or not can_view(ctx.caller, db_obj):
            raise ResourceNotFoundError(self.definition.label, id)
        return db_obj

    async def _get_modifiable(
        self,
        db: AsyncSession,
        id: UUID,
        ctx: ApiContext,
        *,
        action: str,
        with_relations: bool = False,
    ) -> Any:
        db_obj = await self._get_viewable(db, id, ctx, with_relations=with_relations)
        if not can_modify(ctx.caller, db_obj):
            raise ResourceForbiddenError(self.definition.label, action)
        return db_obj

    async def _ensure_name_available(
        self, db: AsyncSession, name: Optional[str], *, exclude_id: Optional[UUID] = None
    ) -> None:
        if not self.definition.unique_name or not name:
            return
        existing = await self._repo.get_by_name(db, name)
        if existing is not None and existing.id != exclude_id:
            raise NameAlreadyExistsError(self.definition.label, name)

    async def _check_references(
        self, db: AsyncSession, data: Dict[str, Any], ctx: ApiContext
    ) -> None:
        """Single foreign keys in ``data`` must exist and be viewable by the caller."""
        for spec in self.definition.references:
            ref_id = data.get(spec.field)
            if ref_id is None:
                continue
            rows = await self._repo.get_many(db, spec.model, [ref_id])
            if not rows or not can_view(ctx.caller, rows[0]):
                raise ReferenceNotFoundError(spec.label, ref_id)

    async def _resolve_relations(
        self, db: AsyncSession, link_ids: Dict[str, Optional[List[UUID]]], ctx: ApiContext
    ) -> Dict[str, List[Any]]:
        """Load relation targets, in request order with duplicates dropped.

        A null list leaves the relation untouched; an empty list clears it.
        """
        resolved: Dict[str, List[Any]] = {}
        for spec in self.definition.relations:
            ids = link_ids.get(spec.field)
            if ids is None:
                continue
            ids = list(dict.fromkeys(ids))
            found = {row.id: row for row in await self._repo.get_many(db, spec.model, ids)}
            for target_id in ids:
                row = found.get(target_id)
                if row is None or not can_view(ctx.caller, row):
                    raise ReferenceNotFoundError(spec.label, target_id)
            resolved[spec.attribute] = [found[i] for i in ids]
        return resolved

    def _cache_key(self, query: ListQuery, filters: Optional[BaseModel]) -> str:
        params = query.model_dump(mode="json")
        if filters is not None:
            params.update(filters.model_dump(mode="json"))
        return list_cache_key(self.definition.name, params)

    async def _invalidate(self, ctx: ApiContext) -> None:
        dropped = await self._cache.invalidate_prefix(list_cache_prefix(self.definition.name))
        if dropped:
            ctx.logger.debug(f"Dropped {dropped} cached {self.definition.name} list pages")


def _any(clauses: List[ColumnElement[bool]]) -> ColumnElement[bool]:
    return clauses[0] if len(clauses) == 1 else or_(*clauses)
