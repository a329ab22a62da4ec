"""Router factory for ownable resources.

Every ownable resource exposes the same six routes. The factory binds them to
a service protocol and the resource's schemas; resource modules add their
extra routes to the returned router.
"""

from typing import Optional, Type
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.api import deps
from lorekeeper.api.context import ApiContext
from lorekeeper.api.deps import Inject
from lorekeeper.schemas.errors import (
    ConflictErrorResponse,
    ForbiddenErrorResponse,
    NotFoundErrorResponse,
    ValidationErrorResponse,
)
from lorekeeper.schemas.pagination import ListQuery, Page

NOT_FOUND = {404: {"model": NotFoundErrorResponse, "description": "Not Found"}}
FORBIDDEN = {403: {"model": ForbiddenErrorResponse, "description": "Forbidden"}}
CONFLICT = {409: {"model": ConflictErrorResponse, "description": "Conflict"}}
INVALID = {400: {"model": ValidationErrorResponse, "description": "Invalid Request"}}


async def no_filters() -> None:
    """Placeholder dependency for resources without specific filters."""
    return None


def build_resource_router(
    service_protocol: type,
    *,
    label: str,
    read_schema: Type[BaseModel],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    stats_schema: Type[BaseModel] = schemas.ResourceStats,
    filters_schema: Optional[Type[BaseModel]] = None,
) -> APIRouter:
    """Build list, stats, read, create, update and delete routes for one resource.

    Args:
    ----
        service_protocol (type): Container protocol resolving the service.
        label (str): Plural display name used in summaries (``Tags``).
        read_schema (Type[BaseModel]): Response body of a single resource.
        create_schema (Type[BaseModel]): Request body of POST.
        update_schema (Type[BaseModel]): Request body of PATCH.
        stats_schema (Type[BaseModel]): Response body of GET /stats.
        filters_schema (Type[BaseModel], optional): Resource-specific list filters.

    Returns:
    -------
        APIRouter: Router to mount under the resource prefix.
    """
    router = APIRouter()
    get_filters = deps.list_filters(filters_schema) if filters_schema else no_filters
    singular = label[:-1] if label.endswith("s") else label

    @router.get(
        "",
        response_model=Page[read_schema],
        summary=f"List {label}",
        description=f"""List {label.lower()} visible to the caller, one cursor page at a time.

PRIVATE rows are only listed for their owner and for moderators. HIDDEN rows are
listed for everyone with their text fields masked. Pass `nextCursor` back unchanged,
with the same `sortBy` and `sortDir`, to fetch the following page.""",
        responses=INVALID,
    )
    async def list_resources(
        query: ListQuery = Depends(deps.get_list_query),
        filters: Optional[BaseModel] = Depends(get_filters),
        db: AsyncSession = Depends(deps.get_db),
        ctx: ApiContext = Depends(deps.get_context),
        service=Inject(service_protocol),
    ):
        return await service.list(db, query, ctx=ctx, filters=filters)

    @router.get(
        "/stats",
        response_model=stats_schema,
        summary=f"{singular} Statistics",
        responses=FORBIDDEN,
    )
    async def read_stats(
        db: AsyncSession = Depends(deps.get_db),
        ctx: ApiContext = Depends(deps.get_context),
        service=Inject(service_protocol),
    ):
        """Aggregate statistics. Moderators and admins only."""
        return await service.get_stats(db, ctx=ctx)

    @router.get(
        "/{id}",
        response_model=read_schema,
        summary=f"Get {singular}",
        responses=NOT_FOUND,
    )
    async def read_resource(
        id: UUID = Path(..., description=f"{singular} id"),
        db: AsyncSession = Depends(deps.get_db),
        ctx: ApiContext = Depends(deps.get_context),
        service=Inject(service_protocol),
    ):
        """Get one resource, masked for the caller when HIDDEN."""
        return await service.get_by_id(db, id, ctx=ctx)

    @router.post(
        "",
        response_model=read_schema,
        status_code=201,
        summary=f"Create {singular}",
        responses={**INVALID, **FORBIDDEN, **CONFLICT},
    )
    async def create_resource(
        obj_in: create_schema,
        db: AsyncSession = Depends(deps.get_db),
        ctx: ApiContext = Depends(deps.get_context),
        service=Inject(service_protocol),
    ):
        """Create a resource owned by the caller."""
        return await service.create(db, obj_in, ctx=ctx)

    @router.patch(
        "/{id}",
        response_model=read_schema,
        summary=f"Update {singular}",
        responses={**INVALID, **FORBIDDEN, **NOT_FOUND, **CONFLICT},
    )
    async def update_resource(
        obj_in: update_schema,
        id: UUID = Path(..., description=f"{singular} id"),
        db: AsyncSession = Depends(deps.get_db),
        ctx: ApiContext = Depends(deps.get_context),
        service=Inject(service_protocol),
    ):
        """Apply a partial update. Omitted fields are left unchanged."""
        return await service.update(db, id, obj_in, ctx=ctx)

    @router.delete(
        "/{id}",
        status_code=204,
        summary=f"Delete {singular}",
        responses={**FORBIDDEN, **NOT_FOUND, **CONFLICT},
    )
    async def delete_resource(
        id: UUID = Path(..., description=f"{singular} id"),
        db: AsyncSession = Depends(deps.get_db),
        ctx: ApiContext = Depends(deps.get_context),
        service=Inject(service_protocol),
    ) -> Response:
        """Delete a resource that nothing references any more."""
        await service.delete(db, id, ctx=ctx)
        return Response(status_code=204)

    return router
