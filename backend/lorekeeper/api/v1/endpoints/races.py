"""Races API endpoints."""

from lorekeeper import schemas
from lorekeeper.api.v1.resource_router import build_resource_router
from lorekeeper.domains.races.protocols import RaceServiceProtocol

router = build_resource_router(
    RaceServiceProtocol,
    label="Races",
    read_schema=schemas.Race,
    create_schema=schemas.RaceCreate,
    update_schema=schemas.RaceUpdate,
)
