"""Protocols for the shared resource template."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, Sequence
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper.api.context import ApiContext
from lorekeeper.domains.resources.types import ListPlan, ResourceDefinition
from lorekeeper.schemas.pagination import ListQuery, Page
from lorekeeper.schemas.stats import ResourceStats


class ResourceRepositoryProtocol(Protocol):
    """Data access for one ownable resource type."""

    definition: ResourceDefinition

    async def get(
        self, db: AsyncSession, id: UUID, *, with_relations: bool = False
    ) -> Optional[Any]:
        """Get a row by id, optionally with its relation collections loaded."""
        ...

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Any]:
        """Get a row by case-insensitive name."""
        ...

    async def get_many(self, db: AsyncSession, model: Any, ids: Sequence[UUID]) -> List[Any]:
        """Get rows of ``model`` by id. Missing ids are skipped."""
        ...

    async def find_many(self, db: AsyncSession, plan: ListPlan) -> List[Any]:
        """Run a list plan and return up to ``plan.fetch_limit`` rows."""
        ...

    async def create(
        self, db: AsyncSession, *, obj_in: Dict[str, Any], relations: Dict[str, List[Any]]
    ) -> Any:
        """Insert a row and its relation links."""
        ...

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: Any,
        obj_in: Dict[str, Any],
        relations: Dict[str, List[Any]],
    ) -> Any:
        """Apply column changes and replace the given relation collections."""
        ...

    async def delete(self, db: AsyncSession, *, db_obj: Any) -> None:
        """Delete a row."""
        ...

    async def count_references(self, db: AsyncSession, id: UUID) -> Dict[str, int]:
        """Count rows blocking deletion, keyed by the referencing kind."""
        ...

    async def aggregate_stats(
        self, db: AsyncSession, *, since: datetime, top_n: int
    ) -> ResourceStats:
        """Compute statistics over the whole table."""
        ...


class ResourceServiceProtocol(Protocol):
    """Read, list, write and statistics operations for one resource type."""

    definition: ResourceDefinition

    async def get_by_id(self, db: AsyncSession, id: UUID, *, ctx: ApiContext) -> BaseModel:
        """Get one resource, masked for the caller."""
        ...

    async def list(
        self,
        db: AsyncSession,
        query: ListQuery,
        *,
        ctx: ApiContext,
        filters: Optional[BaseModel] = None,
    ) -> Page:
        """List resources visible to the caller, one cursor page at a time."""
        ...

    async def create(self, db: AsyncSession, obj_in: BaseModel, *, ctx: ApiContext) -> BaseModel:
        """Create a resource owned by the caller (or by a named owner for privileged callers)."""
        ...

    async def update(
        self, db: AsyncSession, id: UUID, obj_in: BaseModel, *, ctx: ApiContext
    ) -> BaseModel:
        """Apply a partial update."""
        ...

    async def delete(self, db: AsyncSession, id: UUID, *, ctx: ApiContext) -> None:
        """Delete a resource."""
        ...

    async def get_stats(self, db: AsyncSession, *, ctx: ApiContext) -> ResourceStats:
        """Aggregate statistics. Privileged callers only."""
        ...
