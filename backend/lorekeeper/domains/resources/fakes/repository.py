"""Fake resource repository for testing."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper.core.access_control import can_view, is_privileged
from lorekeeper.core.exceptions import ConflictException, ResourceInUseException
from lorekeeper.core.pagination import is_after, sort_key
from lorekeeper.core.shared_models import SortDirection, Visibility
from lorekeeper.domains.resources.types import ListPlan, ResourceDefinition
from lorekeeper.schemas.stats import ResourceStats


class FakeResourceRepository:
    """In-memory fake for ResourceRepositoryProtocol.

    ``find_many`` evaluates the security rules, the generic search,
    visibility and owner filters, and keyset pagination in Python.
    Resource-specific business filters are not interpreted.
    """

    def __init__(self, definition: ResourceDefinition) -> None:
        """Initialize with empty stores."""
        self.definition = definition
        self._store: Dict[UUID, Any] = {}
        self._related: Dict[Tuple[type, UUID], Any] = {}
        self._references: Dict[UUID, Dict[str, int]] = {}
        self._in_use: set[UUID] = set()
        self._stats: Optional[ResourceStats] = None
        self._calls: List[Tuple[Any, ...]] = []

    # -- seeding -----------------------------------------------------------

    def seed(self, obj: Any) -> Any:
        """Seed a row of this repository's model."""
        now = datetime.now(timezone.utc)
        if getattr(obj, "id", None) is None:
            obj.id = uuid4()
        if getattr(obj, "created_at", None) is None:
            obj.created_at = now
        if getattr(obj, "updated_at", None) is None:
            obj.updated_at = obj.created_at
        if getattr(obj, "visibility", None) is None:
            obj.visibility = Visibility.PUBLIC.value
        self._store[obj.id] = obj
        return obj

    def seed_related(self, obj: Any) -> Any:
        """Seed a row of another model, returned by ``get_many``."""
        if getattr(obj, "id", None) is None:
            obj.id = uuid4()
        if getattr(obj, "visibility", None) is None:
            obj.visibility = Visibility.PUBLIC.value
        self._related[(type(obj), obj.id)] = obj
        return obj

    def seed_references(self, id: UUID, counts: Dict[str, int]) -> None:
        """Make ``count_references`` report blocking rows for ``id``."""
        self._references[id] = counts

    def seed_in_use(self, id: UUID) -> None:
        """Make ``delete`` fail as if a foreign key still pointed at ``id``."""
        self._in_use.add(id)

    def seed_stats(self, stats: ResourceStats) -> None:
        """Result returned by ``aggregate_stats``."""
        self._stats = stats

    # -- protocol ----------------------------------------------------------

    async def get(
        self, db: AsyncSession, id: UUID, *, with_relations: bool = False
    ) -> Optional[Any]:
        """Return seeded row by id."""
        self._calls.append(("get", id, with_relations))
        return self._store.get(id)

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Any]:
        """Return the first seeded row whose name matches case-insensitively."""
        self._calls.append(("get_by_name", name))
        column = self.definition.name_column
        for obj in self._store.values():
            value = getattr(obj, column, None)
            if value is not None and value.lower() == name.lower():
                return obj
        return None

    async def get_many(self, db: AsyncSession, model: Any, ids: Sequence[UUID]) -> List[Any]:
        """Return seeded rows of ``model`` by id."""
        self._calls.append(("get_many", model, list(ids)))
        rows = []
        for id in ids:
            obj = self._related.get((model, id))
            if obj is None and model is self.definition.model:
                obj = self._store.get(id)
            if obj is not None:
                rows.append(obj)
        return rows

    async def find_many(self, db: AsyncSession, plan: ListPlan) -> List[Any]:
        """Evaluate the plan over seeded rows."""
        self._calls.append(("find_many", plan))
        rows = [obj for obj in self._store.values() if self._matches(obj, plan)]
        rows.sort(
            key=lambda obj: sort_key(plan.page, obj),
            reverse=plan.page.direction == SortDirection.DESC,
        )
        rows = [obj for obj in rows if is_after(plan.page, obj)]
        return rows[: plan.fetch_limit]

    async def create(
        self, db: AsyncSession, *, obj_in: Dict[str, Any], relations: Dict[str, List[Any]]
    ) -> Any:
        """Build and store a model instance."""
        self._calls.append(("create", obj_in, relations))
        self._check_unique(obj_in.get(self.definition.name_column))
        db_obj = self.definition.model(**obj_in)
        for attribute, targets in relations.items():
            setattr(db_obj, attribute, targets)
        return self.seed(db_obj)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: Any,
        obj_in: Dict[str, Any],
        relations: Dict[str, List[Any]],
    ) -> Any:
        """Apply changes in place."""
        self._calls.append(("update", db_obj.id, obj_in, relations))
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        for attribute, targets in relations.items():
            setattr(db_obj, attribute, targets)
        db_obj.updated_at = datetime.now(timezone.utc)
        return db_obj

    async def delete(self, db: AsyncSession, *, db_obj: Any) -> None:
        """Remove from the store."""
        self._calls.append(("delete", db_obj.id))
        if db_obj.id in self._in_use:
            raise ResourceInUseException(
                f"{self.definition.label} is referenced and cannot be deleted"
            )
        self._store.pop(db_obj.id, None)

    async def count_references(self, db: AsyncSession, id: UUID) -> Dict[str, int]:
        """Return seeded reference counts."""
        self._calls.append(("count_references", id))
        return dict(self._references.get(id, {}))

    async def aggregate_stats(
        self, db: AsyncSession, *, since: datetime, top_n: int
    ) -> ResourceStats:
        """Return seeded stats, or counts computed from the store."""
        self._calls.append(("aggregate_stats", since, top_n))
        if self._stats is not None:
            return self._stats
        rows = list(self._store.values())
        return ResourceStats(
            total=len(rows),
            public=sum(1 for r in rows if r.visibility == Visibility.PUBLIC.value),
            private=sum(1 for r in rows if r.visibility == Visibility.PRIVATE.value),
            hidden=sum(1 for r in rows if r.visibility == Visibility.HIDDEN.value),
            new_last_30_days=sum(1 for r in rows if r.created_at >= since),
        )

    # -- helpers -----------------------------------------------------------

    def _matches(self, obj: Any, plan: ListPlan) -> bool:
        if not is_privileged(plan.caller) and not can_view(plan.caller, obj):
            return False
        query = plan.query
        if query is None:
            return True
        if query.search:
            needle = query.search.lower()
            haystack = [getattr(obj, c, None) or "" for c in self.definition.search_columns]
            if not any(needle in value.lower() for value in haystack):
                return False
        if query.visibility is not None and obj.visibility != query.visibility.value:
            return False
        if query.owner_id is not None and obj.owner_id != query.owner_id:
            return False
        return True

    def _check_unique(self, name: Optional[str]) -> None:
        if not self.definition.unique_name or not name:
            return
        for obj in self._store.values():
            value = getattr(obj, self.definition.name_column, None)
            if value is not None and value.lower() == name.lower():
                raise ConflictException(f"{self.definition.label} with this name already exists")
