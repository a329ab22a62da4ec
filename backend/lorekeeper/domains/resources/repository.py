"""SQLAlchemy repository shared by every ownable resource."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select, union_all
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lorekeeper.core.shared_models import Visibility
from lorekeeper.db.errors import translate_integrity_error
from lorekeeper.domains.resources.protocols import ResourceRepositoryProtocol
from lorekeeper.domains.resources.types import ListPlan, ResourceDefinition
from lorekeeper.schemas.stats import ResourceStats, UsageEntry


class ResourceRepository(ResourceRepositoryProtocol):
    """Data access for the model described by a ``ResourceDefinition``."""

    def __init__(self, definition: ResourceDefinition) -> None:
        """Bind the repository to a resource definition."""
        self.definition = definition
        self.model = definition.model

    async def get(
        self, db: AsyncSession, id: UUID, *, with_relations: bool = False
    ) -> Optional[Any]:
        """Get a row by id, optionally with its relation collections loaded."""
        stmt = select(self.model).where(self.model.id == id)
        if with_relations and self.definition.relations:
            stmt = stmt.options(
                *[selectinload(getattr(self.model, r.attribute)) for r in self.definition.relations]
            ).execution_options(populate_existing=True)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Any]:
        """Get a row by case-insensitive name."""
        column = getattr(self.model, self.definition.name_column)
        result = await db.execute(select(self.model).where(func.lower(column) == name.lower()))
        return result.scalars().first()

    async def get_many(self, db: AsyncSession, model: Any, ids: Sequence[UUID]) -> List[Any]:
        """Get rows of ``model`` by id. Missing ids are skipped."""
        if not ids:
            return []
        result = await db.execute(select(model).where(model.id.in_(list(ids))))
        return list(result.scalars().all())

    async def find_many(self, db: AsyncSession, plan: ListPlan) -> List[Any]:
        """Run a list plan and return up to ``plan.fetch_limit`` rows."""
        stmt = (
            select(self.model).where(plan.where).order_by(*plan.order_by).limit(plan.fetch_limit)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def create(
        self, db: AsyncSession, *, obj_in: Dict[str, Any], relations: Dict[str, List[Any]]
    ) -> Any:
        """Insert a row and its relation links."""
        db_obj = self.model(**obj_in)
        for attribute, targets in relations.items():
            setattr(db_obj, attribute, targets)
        db.add(db_obj)
        await self._flush(db)
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: Any,
        obj_in: Dict[str, Any],
        relations: Dict[str, List[Any]],
    ) -> Any:
        """Apply column changes and replace the given relation collections."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        for attribute, targets in relations.items():
            setattr(db_obj, attribute, targets)
        db.add(db_obj)
        await self._flush(db)
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, db_obj: Any) -> None:
        """Delete a row. Foreign key violations surface as ``ResourceInUseException``."""
        await db.delete(db_obj)
        await self._flush(db, deleting=True)

    async def count_references(self, db: AsyncSession, id: UUID) -> Dict[str, int]:
        """Count rows blocking deletion, keyed by the referencing kind."""
        counts: Dict[str, int] = {}
        for check in self.definition.delete_checks:
            column = getattr(check.model, check.column)
            result = await db.execute(select(func.count()).where(column == id))
            counts[check.label] = int(result.scalar_one())
        return counts

    async def aggregate_stats(
        self, db: AsyncSession, *, since: datetime, top_n: int
    ) -> ResourceStats:
        """Visibility breakdown, recent creations and the most used rows."""
        return ResourceStats(**await self._base_stats(db, since=since, top_n=top_n))

    async def _base_stats(self, db: AsyncSession, *, since: datetime, top_n: int) -> Dict[str, Any]:
        by_visibility = await db.execute(
            select(self.model.visibility, func.count()).group_by(self.model.visibility)
        )
        counts = {str(v): int(n) for v, n in by_visibility.all()}
        recent = await db.execute(select(func.count()).where(self.model.created_at >= since))
        return {
            "total": sum(counts.values()),
            "public": counts.get(Visibility.PUBLIC.value, 0),
            "private": counts.get(Visibility.PRIVATE.value, 0),
            "hidden": counts.get(Visibility.HIDDEN.value, 0),
            "new_last_30_days": int(recent.scalar_one()),
            "most_used": await self._most_used(db, top_n),
        }

    async def _most_used(self, db: AsyncSession, top_n: int) -> List[UsageEntry]:
        """Rank rows by how many usage columns point at them."""
        if not self.definition.usage:
            return []
        uses = [
            select(getattr(src.table.c, src.column).label("resource_id")).where(
                getattr(src.table.c, src.column).is_not(None)
            )
            for src in self.definition.usage
        ]
        usage = (uses[0] if len(uses) == 1 else union_all(*uses)).subquery()
        name = getattr(self.model, self.definition.name_column)
        stmt = (
            select(self.model.id, name, func.count().label("usage_count"))
            .join(usage, usage.c.resource_id == self.model.id)
            .group_by(self.model.id, name)
            .order_by(func.count().desc(), name.asc())
            .limit(top_n)
        )
        result = await db.execute(stmt)
        return [
            UsageEntry(id=row_id, name=row_name or "", usage_count=int(count))
            for row_id, row_name, count in result.all()
        ]

    async def _flush(self, db: AsyncSession, *, deleting: bool = False) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            raise translate_integrity_error(e, self.definition.label, deleting=deleting) from e
