"""Images API endpoints."""

from uuid import UUID

from fastapi import Depends, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.api import deps
from lorekeeper.api.context import ApiContext
from lorekeeper.api.deps import Inject
from lorekeeper.api.v1.resource_router import NOT_FOUND, build_resource_router
from lorekeeper.domains.images.protocols import ImageServiceProtocol

router = build_resource_router(
    ImageServiceProtocol,
    label="Images",
    read_schema=schemas.Image,
    create_schema=schemas.ImageCreate,
    update_schema=schemas.ImageUpdate,
    stats_schema=schemas.ImageStats,
    filters_schema=schemas.ImageFilters,
)


@router.get(
    "/{id}/file",
    response_class=Response,
    summary="Download Image",
    responses={200: {"content": {"image/*": {}}}, **NOT_FOUND},
)
async def read_file(
    id: UUID = Path(..., description="Image id"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    image_service: ImageServiceProtocol = Inject(ImageServiceProtocol),
) -> Response:
    """Return the stored bytes with their mime type.

    HIDDEN images are served as-is; only their text fields are masked.
    """
    blob, mime_type = await image_service.get_file(db, id, ctx=ctx)
    return Response(content=blob, media_type=mime_type)
