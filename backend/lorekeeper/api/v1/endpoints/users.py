"""Users API endpoints.

Accounts are created by the identity provider, so there is no POST. Callers
get the full projection of their own account and of accounts they manage, and
the public projection of everyone else.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.api import deps
from lorekeeper.api.context import ApiContext
from lorekeeper.api.deps import Inject
from lorekeeper.api.v1.resource_router import CONFLICT, FORBIDDEN, INVALID, NOT_FOUND
from lorekeeper.domains.users.protocols import UserServiceProtocol, UserView
from lorekeeper.schemas.pagination import ListQuery, Page

router = APIRouter()



@router.get("/me", response_model=schemas.User, summary="Get Current User", responses=FORBIDDEN)
async def read_me(
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> schemas.User:
    """Get the caller's own account."""
    return await user_service.get_me(db, ctx=ctx)


@router.get(
    "",
    response_model=Page[UserView],
    summary="List Users",
    description="""List the accounts the caller may see.

Anonymous callers see nobody and regular users see only themselves.
Moderators see regular users plus themselves; admins see everyone.""",
    responses=INVALID,
)
async def list_users(
    query: ListQuery = Depends(deps.get_list_query),
    filters: Optional[schemas.UserFilters] = Depends(deps.list_filters(schemas.UserFilters)),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> Page[UserView]:
    return await user_service.list(db, query, ctx=ctx, filters=filters)


@router.get(
    "/stats", response_model=schemas.UserStats, summary="User Statistics", responses=FORBIDDEN
)
async def read_stats(
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> schemas.UserStats:
    """Account counts. Moderators and admins only."""
    return await user_service.get_stats(db, ctx=ctx)


@router.get("/{id}", response_model=UserView, summary="Get User", responses=NOT_FOUND)
async def read_user(
    id: UUID = Path(..., description="User id"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> UserView:
    return await user_service.get_by_id(db, id, ctx=ctx)


@router.patch(
    "/{id}",
    response_model=schemas.User,
    summary="Update User",
    description="""Update an account.

Account holders may change `name`, `bio`, `email` and `profilePictureId`.
Changing `role` or `isEmailVerified` requires a manager: admins manage
non-admins, moderators manage regular users, and nobody manages themselves.""",
    responses={**INVALID, **FORBIDDEN, **NOT_FOUND, **CONFLICT},
)
async def update_user(
    obj_in: schemas.UserUpdate,
    id: UUID = Path(..., description="User id"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> schemas.User:
    return await user_service.update(db, id, obj_in, ctx=ctx)


@router.post(
    "/{id}/ban",
    response_model=schemas.User,
    summary="Ban User",
    responses={**FORBIDDEN, **NOT_FOUND, **CONFLICT},
)
async def ban_user(
    obj_in: schemas.BanRequest,
    id: UUID = Path(..., description="User id"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> schemas.User:
    """Ban a user, permanently unless `bannedUntil` is given."""
    return await user_service.ban(db, id, obj_in, ctx=ctx)


@router.post(
    "/{id}/unban",
    response_model=schemas.User,
    summary="Unban User",
    responses={**FORBIDDEN, **NOT_FOUND, **CONFLICT},
)
async def unban_user(
    id: UUID = Path(..., description="User id"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> schemas.User:
    return await user_service.unban(db, id, ctx=ctx)


@router.delete(
    "/{id}",
    status_code=204,
    summary="Delete User",
    responses={**FORBIDDEN, **NOT_FOUND},
)
async def delete_user(
    id: UUID = Path(..., description="User id"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> Response:
    """Delete an account. Resources it owned become system-owned."""
    await user_service.delete(db, id, ctx=ctx)
    return Response(status_code=204)
