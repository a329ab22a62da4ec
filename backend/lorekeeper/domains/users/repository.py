"""User repository."""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.core.shared_models import UserRole
from lorekeeper.db.errors import UNIQUE_VIOLATION, sqlstate, translate_integrity_error
from lorekeeper.domains.resources.types import ListPlan
from lorekeeper.domains.users.exceptions import EmailAlreadyExistsError
from lorekeeper.domains.users.protocols import UserRepositoryProtocol
from lorekeeper.models import User


class UserRepository(UserRepositoryProtocol):
    """SQLAlchemy data access for user accounts."""

    async def get(self, db: AsyncSession, id: UUID) -> Optional[User]:
        """Get a user by id."""
        result = await db.execute(select(User).where(User.id == id))
        return result.scalar_one_or_none()

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Get a user by case-insensitive email."""
        result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
        return result.scalars().first()

    async def find_many(self, db: AsyncSession, plan: ListPlan) -> List[User]:
        """Run a list plan and return up to ``plan.fetch_limit`` rows."""
        stmt = select(User).where(plan.where).order_by(*plan.order_by).limit(plan.fetch_limit)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def update(self, db: AsyncSession, *, db_obj: User, obj_in: Dict[str, Any]) -> User:
        """Apply column changes."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        try:
            await db.flush()
        except IntegrityError as e:
            if sqlstate(e) == UNIQUE_VIOLATION and "email" in obj_in:
                raise EmailAlreadyExistsError(obj_in["email"]) from e
            raise translate_integrity_error(e, "User") from e
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, db_obj: User) -> None:
        """Delete a user. Owned resources become system-owned."""
        await db.delete(db_obj)
        try:
            await db.flush()
        except IntegrityError as e:
            raise translate_integrity_error(e, "User", deleting=True) from e

    async def aggregate_stats(self, db: AsyncSession, *, since: datetime) -> schemas.UserStats:
        """Totals, ban and verification counts, role breakdown and recent sign-ups."""
        totals = await db.execute(
            select(
                func.count(),
                func.count().filter(User.is_banned.is_(True)),
                func.count().filter(User.is_email_verified.is_(False)),
                func.count().filter(User.created_at >= since),
            ).select_from(User)
        )
        total, banned, unverified, recent = (int(n) for n in totals.one())
        by_role = await db.execute(select(User.role, func.count()).group_by(User.role))
        roles = {role.value: 0 for role in UserRole}
        roles.update({str(role): int(n) for role, n in by_role.all()})
        return schemas.UserStats(
            total=total,
            active=total - banned,
            banned=banned,
            unverified=unverified,
            by_role=roles,
            new_last_30_days=recent,
        )
