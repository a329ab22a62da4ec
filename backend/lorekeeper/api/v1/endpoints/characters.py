"""Characters API endpoints.

Besides the shared resource routes, characters expose an expanded view with
their related resources embedded, and their equipment.
"""

from uuid import UUID

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.api import deps
from lorekeeper.api.context import ApiContext
from lorekeeper.api.deps import Inject
from lorekeeper.api.v1.resource_router import (
    FORBIDDEN,
    INVALID,
    NOT_FOUND,
    build_resource_router,
)
from lorekeeper.domains.characters.protocols import CharacterServiceProtocol
from lorekeeper.domains.equipment.protocols import EquipmentServiceProtocol

router = build_resource_router(
    CharacterServiceProtocol,
    label="Characters",
    read_schema=schemas.Character,
    create_schema=schemas.CharacterCreate,
    update_schema=schemas.CharacterUpdate,
    stats_schema=schemas.CharacterStats,
    filters_schema=schemas.CharacterFilters,
)


@router.get(
    "/equipment/stats",
    response_model=schemas.EquipmentStats,
    summary="Equipment Statistics",
    responses=FORBIDDEN,
)
async def read_equipment_stats(
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    equipment_service: EquipmentServiceProtocol = Inject(EquipmentServiceProtocol),
) -> schemas.EquipmentStats:
    """Characters with equipment and per-slot usage. Moderators and admins only."""
    return await equipment_service.get_stats(db, ctx=ctx)


@router.get(
    "/{id}/expanded",
    response_model=schemas.CharacterExpanded,
    summary="Get Expanded Character",
    description="""Get a character with its race, archetype, image, skills, perks,
tags, inventory and equipment embedded as summaries.

Embedded resources the caller may not see are rendered as placeholders whose
text fields read `[HIDDEN]`.""",
    responses=NOT_FOUND,
)
async def read_expanded(
    id: UUID = Path(..., description="Character id"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    character_service: CharacterServiceProtocol = Inject(CharacterServiceProtocol),
) -> schemas.CharacterExpanded:
    return await character_service.get_expanded(db, id, ctx=ctx)


@router.get(
    "/{id}/equipment",
    response_model=schemas.Equipment,
    summary="Get Equipment",
    responses=NOT_FOUND,
)
async def read_equipment(
    id: UUID = Path(..., description="Character id"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    equipment_service: EquipmentServiceProtocol = Inject(EquipmentServiceProtocol),
) -> schemas.Equipment:
    """Get a character's equipment. Every slot is null until something is equipped."""
    return await equipment_service.get(db, id, ctx=ctx)


@router.patch(
    "/{id}/equipment",
    response_model=schemas.Equipment,
    summary="Update Equipment",
    description="""Assign items to equipment slots.

Slots set to `null` are emptied and omitted slots are kept. The two-handed
`handsId` slot cannot be combined with `rightHandId` or `leftHandId`, and every
item must fit the slot it is placed in.""",
    responses={**INVALID, **FORBIDDEN, **NOT_FOUND},
)
async def update_equipment(
    obj_in: schemas.EquipmentUpdate,
    id: UUID = Path(..., description="Character id"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    equipment_service: EquipmentServiceProtocol = Inject(EquipmentServiceProtocol),
) -> schemas.Equipment:
    return await equipment_service.update(db, id, obj_in, ctx=ctx)
