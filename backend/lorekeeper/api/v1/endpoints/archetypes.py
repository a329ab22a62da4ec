"""Archetypes API endpoints."""

from lorekeeper import schemas
from lorekeeper.api.v1.resource_router import build_resource_router
from lorekeeper.domains.archetypes.protocols import ArchetypeServiceProtocol

router = build_resource_router(
    ArchetypeServiceProtocol,
    label="Archetypes",
    read_schema=schemas.Archetype,
    create_schema=schemas.ArchetypeCreate,
    update_schema=schemas.ArchetypeUpdate,
)
