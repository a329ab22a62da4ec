"""Fake user repository for testing."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.core.access_control import can_view_account
from lorekeeper.core.pagination import is_after, sort_key
from lorekeeper.core.shared_models import SortDirection, UserRole
from lorekeeper.domains.resources.types import ListPlan
from lorekeeper.models import User


class FakeUserRepository:
    """In-memory fake for UserRepositoryProtocol.

    ``find_many`` applies the account visibility rules, search, the user
    filters and keyset pagination in Python.
    """

    def __init__(self) -> None:
        """Initialize with empty stores."""
        self._store: Dict[UUID, User] = {}
        self._calls: List[Tuple[Any, ...]] = []

    def seed(self, user: User) -> User:
        """Seed a user; missing defaults are filled in."""
        now = datetime.now(timezone.utc)
        if user.id is None:
            user.id = uuid4()
        if user.role is None:
            user.role = UserRole.USER.value
        for flag in ("is_banned", "is_email_verified"):
            if getattr(user, flag) is None:
                setattr(user, flag, False)
        if user.created_at is None:
            user.created_at = now
        if user.updated_at is None:
            user.updated_at = user.created_at
        self._store[user.id] = user
        return user

    async def get(self, db: AsyncSession, id: UUID) -> Optional[User]:
        """Return seeded user."""
        self._calls.append(("get", id))
        return self._store.get(id)

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Return seeded user by case-insensitive email."""
        self._calls.append(("get_by_email", email))
        for user in self._store.values():
            if user.email.lower() == email.lower():
                return user
        return None

    async def find_many(self, db: AsyncSession, plan: ListPlan) -> List[User]:
        """Evaluate the plan over seeded users."""
        self._calls.append(("find_many", plan))
        rows = [u for u in self._store.values() if self._matches(u, plan)]
        rows.sort(
            key=lambda u: sort_key(plan.page, u),
            reverse=plan.page.direction == SortDirection.DESC,
        )
        rows = [u for u in rows if is_after(plan.page, u)]
        return rows[: plan.fetch_limit]

    async def update(self, db: AsyncSession, *, db_obj: User, obj_in: Dict[str, Any]) -> User:
        """Apply changes in place."""
        self._calls.append(("update", db_obj.id, obj_in))
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db_obj.updated_at = datetime.now(timezone.utc)
        return db_obj

    async def delete(self, db: AsyncSession, *, db_obj: User) -> None:
        """Remove from the store."""
        self._calls.append(("delete", db_obj.id))
        self._store.pop(db_obj.id, None)

    async def aggregate_stats(self, db: AsyncSession, *, since: datetime) -> schemas.UserStats:
        """Counts computed from the store."""
        self._calls.append(("aggregate_stats", since))
        users = list(self._store.values())
        banned = sum(1 for u in users if u.is_banned)
        by_role = {role.value: 0 for role in UserRole}
        for u in users:
            by_role[UserRole(u.role).value] += 1
        return schemas.UserStats(
            total=len(users),
            active=len(users) - banned,
            banned=banned,
            unverified=sum(1 for u in users if not u.is_email_verified),
            by_role=by_role,
            new_last_30_days=sum(1 for u in users if u.created_at >= since),
        )

    @staticmethod
    def _matches(user: User, plan: ListPlan) -> bool:
        if not can_view_account(plan.caller, user.id, UserRole(user.role)):
            return False
        if plan.query is not None and plan.query.search:
            needle = plan.query.search.lower()
            if needle not in (user.name or "").lower() and needle not in user.email.lower():
                return False
        filters = plan.filters
        if filters is not None:
            if filters.role is not None and user.role != filters.role.value:
                return False
            if filters.is_banned is not None and user.is_banned != filters.is_banned:
                return False
            if (
                filters.is_email_verified is not None
                and user.is_email_verified != filters.is_email_verified
            ):
                return False
        return True
