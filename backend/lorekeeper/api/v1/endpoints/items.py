"""Items API endpoints."""

from lorekeeper import schemas
from lorekeeper.api.v1.resource_router import build_resource_router
from lorekeeper.domains.items.protocols import ItemServiceProtocol

router = build_resource_router(
    ItemServiceProtocol,
    label="Items",
    read_schema=schemas.Item,
    create_schema=schemas.ItemCreate,
    update_schema=schemas.ItemUpdate,
    filters_schema=schemas.ItemFilters,
)
