"""Protocols for the user domain."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.api.context import ApiContext
from lorekeeper.domains.resources.types import ListPlan
from lorekeeper.models import User
from lorekeeper.schemas.pagination import ListQuery, Page

UserView = Union[schemas.User, schemas.PublicUser]


class UserRepositoryProtocol(Protocol):
    """Data access for user accounts."""

    async def get(self, db: AsyncSession, id: UUID) -> Optional[User]:
        """Get a user by id."""
        ...

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Get a user by case-insensitive email."""
        ...

    async def find_many(self, db: AsyncSession, plan: ListPlan) -> List[User]:
        """Run a list plan and return up to ``plan.fetch_limit`` rows."""
        ...

    async def update(self, db: AsyncSession, *, db_obj: User, obj_in: Dict[str, Any]) -> User:
        """Apply column changes."""
        ...

    async def delete(self, db: AsyncSession, *, db_obj: User) -> None:
        """Delete a user. Owned resources become system-owned."""
        ...

    async def aggregate_stats(self, db: AsyncSession, *, since: datetime) -> schemas.UserStats:
        """Account counts."""
        ...


class UserServiceProtocol(Protocol):
    """User account operations."""

    async def get_me(self, db: AsyncSession, *, ctx: ApiContext) -> schemas.User:
        """Full projection of the caller's own account."""
        ...

    async def get_by_id(self, db: AsyncSession, id: UUID, *, ctx: ApiContext) -> UserView:
        """Full projection for self and managed accounts, public projection otherwise."""
        ...

    async def list(
        self,
        db: AsyncSession,
        query: ListQuery,
        *,
        ctx: ApiContext,
        filters: Optional[schemas.UserFilters] = None,
    ) -> Page[UserView]:
        """List the accounts the caller may see."""
        ...

    async def update(
        self, db: AsyncSession, id: UUID, obj_in: schemas.UserUpdate, *, ctx: ApiContext
    ) -> schemas.User:
        """Update profile fields, and role or verification for managers."""
        ...

    async def ban(
        self, db: AsyncSession, id: UUID, obj_in: schemas.BanRequest, *, ctx: ApiContext
    ) -> schemas.User:
        """Ban a user."""
        ...

    async def unban(self, db: AsyncSession, id: UUID, *, ctx: ApiContext) -> schemas.User:
        """Lift a ban."""
        ...

    async def delete(self, db: AsyncSession, id: UUID, *, ctx: ApiContext) -> None:
        """Delete an account."""
        ...

    async def get_stats(self, db: AsyncSession, *, ctx: ApiContext) -> schemas.UserStats:
        """Account statistics. Privileged callers only."""
        ...
