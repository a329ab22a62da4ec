"""Tags API endpoints."""

from lorekeeper import schemas
from lorekeeper.api.v1.resource_router import build_resource_router
from lorekeeper.domains.tags.protocols import TagServiceProtocol

router = build_resource_router(
    TagServiceProtocol,
    label="Tags",
    read_schema=schemas.Tag,
    create_schema=schemas.TagCreate,
    update_schema=schemas.TagUpdate,
)
