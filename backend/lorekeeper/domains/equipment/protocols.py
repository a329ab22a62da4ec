"""Protocols for the equipment domain."""

from typing import Dict, List, Optional, Protocol, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.api.context import ApiContext
from lorekeeper.models import Character, Equipment, Item


class EquipmentRepositoryProtocol(Protocol):
    """Data access for equipment rows and the rows they point at."""

    async def get_character(self, db: AsyncSession, character_id: UUID) -> Optional[Character]:
        """Get the owning character."""
        ...

    async def get_by_character(
        self, db: AsyncSession, character_id: UUID
    ) -> Optional[Equipment]:
        """Get a character's equipment row, if one exists."""
        ...

    async def get_items(self, db: AsyncSession, ids: Sequence[UUID]) -> List[Item]:
        """Get items by id. Missing ids are skipped."""
        ...

    async def upsert(
        self, db: AsyncSession, *, character_id: UUID, slots: Dict[str, Optional[UUID]]
    ) -> Equipment:
        """Create the row if needed and apply slot assignments."""
        ...

    async def aggregate_stats(self, db: AsyncSession) -> schemas.EquipmentStats:
        """Characters with equipment and per-slot usage."""
        ...


class EquipmentServiceProtocol(Protocol):
    """Equipment operations, gated on the owning character."""

    async def get(
        self, db: AsyncSession, character_id: UUID, *, ctx: ApiContext
    ) -> schemas.Equipment:
        """Get a character's equipment."""
        ...

    async def update(
        self,
        db: AsyncSession,
        character_id: UUID,
        obj_in: schemas.EquipmentUpdate,
        *,
        ctx: ApiContext,
    ) -> schemas.Equipment:
        """Validate and apply slot assignments."""
        ...

    async def render_slots(
        self, db: AsyncSession, character_id: UUID, *, ctx: ApiContext
    ) -> schemas.EquipmentSlots:
        """Equipped items as summaries, without the character gate."""
        ...

    async def get_stats(self, db: AsyncSession, *, ctx: ApiContext) -> schemas.EquipmentStats:
        """Aggregate equipment statistics. Privileged callers only."""
        ...
