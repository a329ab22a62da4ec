"""Perks API endpoints."""

from lorekeeper import schemas
from lorekeeper.api.v1.resource_router import build_resource_router
from lorekeeper.domains.perks.protocols import PerkServiceProtocol

router = build_resource_router(
    PerkServiceProtocol,
    label="Perks",
    read_schema=schemas.Perk,
    create_schema=schemas.PerkCreate,
    update_schema=schemas.PerkUpdate,
    filters_schema=schemas.PerkFilters,
)
