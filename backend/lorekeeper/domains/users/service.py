"""User service.

Accounts are not ownable resources. Visibility follows the user security
filter: anonymous callers list nobody, ADMIN lists everyone, MODERATOR lists
plain users plus themselves and USER lists only themselves. Any existing
account can still be fetched by id in its public projection.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from lorekeeper import schemas
from lorekeeper.api.context import ApiContext
from lorekeeper.core.access_control import (
    build_user_security_filter,
    can_manage_user,
    can_view_account,
)
from lorekeeper.core.config import Settings
from lorekeeper.core.exceptions import PermissionException, ValidationException
from lorekeeper.core.pagination import (
    SortField,
    build_page,
    continuation_predicate,
    order_by,
    plan_page,
)
from lorekeeper.core.protocols import ALL_LISTS, ListCache
from lorekeeper.core.shared_models import UserRole
from lorekeeper.db.unit_of_work import UnitOfWork
from lorekeeper.domains.resources.service import column_values
from lorekeeper.domains.resources.types import DEFAULT_SORT_FIELDS, ListPlan, sort_fields
from lorekeeper.domains.users.exceptions import (
    BanStateConflictError,
    EmailAlreadyExistsError,
    UserNotFoundError,
)
from lorekeeper.domains.users.protocols import (
    UserRepositoryProtocol,
    UserServiceProtocol,
    UserView,
)
from lorekeeper.models import User
from lorekeeper.schemas.pagination import ListQuery, Page
from lorekeeper.schemas.stats import NEW_WINDOW_DAYS

USER_SORT_FIELDS = sort_fields(SortField("email", "email", str), base=DEFAULT_SORT_FIELDS)

# Fields only a manager of the account may change.
MANAGED_FIELDS = frozenset({"role", "is_email_verified"})

# Fields that may be cleared with an explicit null.
NULLABLE_FIELDS = frozenset({"bio", "profile_picture_id"})


class UserService(UserServiceProtocol):
    """Reads, lists, moderates and deletes user accounts."""

    def __init__(
        self, user_repo: UserRepositoryProtocol, list_cache: ListCache, settings: Settings
    ) -> None:
        """Initialize with injected dependencies."""
        self._repo = user_repo
        self._cache = list_cache
        self._settings = settings

    async def get_me(self, db: AsyncSession, *, ctx: ApiContext) -> schemas.User:
        """Full projection of the caller's own account.

        Raises:
            PermissionException: If the request is anonymous.
            UserNotFoundError: If the caller's account no longer exists.
        """
        if ctx.caller is None:
            raise PermissionException("Authentication required")
        user = await self._get(db, ctx.caller.id)
        return schemas.User.model_validate(user, from_attributes=True)

    async def get_by_id(self, db: AsyncSession, id: UUID, *, ctx: ApiContext) -> UserView:
        """Full projection for self and managed accounts, public projection otherwise.

        Raises:
            UserNotFoundError: If the account does not exist.
        """
        user = await self._get(db, id)
        return self._project(user, ctx)

    async def list(
        self,
        db: AsyncSession,
        query: ListQuery,
        *,
        ctx: ApiContext,
        filters: Optional[schemas.UserFilters] = None,
    ) -> Page[UserView]:
        """List the accounts the caller may see, one cursor page at a time."""
        page_plan = plan_page(query, USER_SORT_FIELDS)
        where = build_user_security_filter(
            User, self._business_conditions(query, filters), ctx.caller
        )
        continuation = continuation_predicate(User, page_plan)
        if continuation is not None:
            where = and_(where, continuation)
        plan = ListPlan(
            where=where,
            order_by=order_by(User, page_plan),
            page=page_plan,
            caller=ctx.caller,
            query=query,
            filters=filters,
        )
        rows = await self._repo.find_many(db, plan)
        items, meta = build_page(rows, page_plan)
        return Page[UserView](items=[self._project(u, ctx) for u in items], pagination=meta)

    async def update(
        self, db: AsyncSession, id: UUID, obj_in: schemas.UserUpdate, *, ctx: ApiContext
    ) -> schemas.User:
        """Update an account.

        The account holder may change name, bio, email and profile picture.
        Managers may change the same fields plus role and email verification.

        Raises:
            UserNotFoundError: If the account does not exist.
            PermissionException: If the caller is neither the holder nor a manager,
                or touches manager-only fields without managing the account.
            EmailAlreadyExistsError: If the email belongs to another account.
        """
        patch = obj_in.model_dump(exclude_unset=True)
        for field in [k for k, v in patch.items() if v is None]:
            if field not in NULLABLE_FIELDS:
                raise ValidationException(f"{field} cannot be null")

        async with UnitOfWork(db) as uow:
            user = await self._get(uow.session, id)
            is_self = ctx.caller is not None and ctx.caller.id == user.id
            manages = can_manage_user(ctx.caller, user.id, UserRole(user.role))
            if not (is_self or manages):
                raise PermissionException("You do not have permission to update this user")
            if MANAGED_FIELDS & patch.keys():
                if not manages:
                    raise PermissionException(
                        "Only administrators and moderators can change role or verification"
                    )
                new_role = patch.get("role")
                if new_role is not None and not self._may_assign(ctx, UserRole(new_role)):
                    raise PermissionException(f"You cannot assign the role {new_role.value}")

            email = patch.get("email")
            if email is not None:
                existing = await self._repo.get_by_email(uow.session, email)
                if existing is not None and existing.id != user.id:
                    raise EmailAlreadyExistsError(email)

            user = await self._repo.update(uow.session, db_obj=user, obj_in=column_values(patch))

        ctx.logger.info(f"Updated user {id}")
        return schemas.User.model_validate(user, from_attributes=True)

    async def ban(
        self, db: AsyncSession, id: UUID, obj_in: schemas.BanRequest, *, ctx: ApiContext
    ) -> schemas.User:
        """Ban a user.

        Raises:
            UserNotFoundError: If the account does not exist.
            PermissionException: If the caller does not manage the account.
            BanStateConflictError: If the user is already banned.
        """
        async with UnitOfWork(db) as uow:
            user = await self._get_managed(uow.session, id, ctx, action="ban")
            if user.is_banned:
                raise BanStateConflictError("User is already banned")
            user = await self._repo.update(
                uow.session,
                db_obj=user,
                obj_in={
                    "is_banned": True,
                    "ban_reason": obj_in.ban_reason,
                    "banned_until": obj_in.banned_until,
                    "banned_by_id": ctx.caller.id,
                },
            )

        ctx.logger.info(f"Banned user {id}")
        return schemas.User.model_validate(user, from_attributes=True)

    async def unban(self, db: AsyncSession, id: UUID, *, ctx: ApiContext) -> schemas.User:
        """Lift a ban.

        Raises:
            UserNotFoundError: If the account does not exist.
            PermissionException: If the caller does not manage the account.
            BanStateConflictError: If the user is not banned.
        """
        async with UnitOfWork(db) as uow:
            user = await self._get_managed(uow.session, id, ctx, action="unban")
            if not user.is_banned:
                raise BanStateConflictError("User is not banned")
            user = await self._repo.update(
                uow.session,
                db_obj=user,
                obj_in={
                    "is_banned": False,
                    "ban_reason": None,
                    "banned_until": None,
                    "banned_by_id": None,
                },
            )

        ctx.logger.info(f"Unbanned user {id}")
        return schemas.User.model_validate(user, from_attributes=True)

    async def delete(self, db: AsyncSession, id: UUID, *, ctx: ApiContext) -> None:
        """Delete an account. Its resources become system-owned.

        Raises:
            UserNotFoundError: If the account does not exist.
            PermissionException: If the caller is neither the holder nor a manager.
        """
        async with UnitOfWork(db) as uow:
            user = await self._get(uow.session, id)
            is_self = ctx.caller is not None and ctx.caller.id == user.id
            if not (is_self or can_manage_user(ctx.caller, user.id, UserRole(user.role))):
                raise PermissionException("You do not have permission to delete this user")
            await self._repo.delete(uow.session, db_obj=user)

        # Owned resources were reassigned to the system, so every cached page is stale.
        await self._cache.invalidate_prefix(ALL_LISTS)
        ctx.logger.info(f"Deleted user {id}")

    async def get_stats(self, db: AsyncSession, *, ctx: ApiContext) -> schemas.UserStats:
        """Account statistics.

        Raises:
            PermissionException: If the caller is not ADMIN or MODERATOR.
        """
        if not ctx.is_privileged:
            raise PermissionException("Only administrators and moderators can view statistics")
        since = datetime.now(timezone.utc) - timedelta(days=NEW_WINDOW_DAYS)
        return await self._repo.aggregate_stats(db, since=since)

    async def _get(self, db: AsyncSession, id: UUID) -> User:
        user = await self._repo.get(db, id)
        if user is None:
            raise UserNotFoundError(id)
        return user

    async def _get_managed(
        self, db: AsyncSession, id: UUID, ctx: ApiContext, *, action: str
    ) -> User:
        user = await self._get(db, id)
        if not can_manage_user(ctx.caller, user.id, UserRole(user.role)):
            raise PermissionException(f"You do not have permission to {action} this user")
        return user

    @staticmethod
    def _may_assign(ctx: ApiContext, role: UserRole) -> bool:
        """ADMIN assigns any role; MODERATOR only USER."""
        if ctx.caller is None:
            return False
        if ctx.caller.role == UserRole.ADMIN:
            return True
        return ctx.caller.role == UserRole.MODERATOR and role == UserRole.USER

    @staticmethod
    def _project(user: User, ctx: ApiContext) -> UserView:
        if can_view_account(ctx.caller, user.id, UserRole(user.role)):
            return schemas.User.model_validate(user, from_attributes=True)
        return schemas.PublicUser.model_validate(user, from_attributes=True)

    @staticmethod
    def _business_conditions(
        query: ListQuery, filters: Optional[schemas.UserFilters]
    ) -> List[ColumnElement[bool]]:
        conditions: List[ColumnElement[bool]] = []
        if query.search:
            conditions.append(
                User.name.icontains(query.search, autoescape=True)
                | User.email.icontains(query.search, autoescape=True)
            )
        if filters is not None:
            if filters.role is not None:
                conditions.append(User.role == filters.role.value)
            if filters.is_banned is not None:
                conditions.append(User.is_banned.is_(filters.is_banned))
            if filters.is_email_verified is not None:
                conditions.append(User.is_email_verified.is_(filters.is_email_verified))
        return conditions
