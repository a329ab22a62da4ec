"""Equipment repository."""

from typing import Dict, List, Optional, Sequence
from uuid import UUID

from pydantic.alias_generators import to_camel
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.domains.equipment.protocols import EquipmentRepositoryProtocol
from lorekeeper.models import Character, Equipment, Item
from lorekeeper.schemas.equipment import EQUIPMENT_SLOTS


def slot_column(slot: str):
    """Equipment column holding the item id of ``slot``."""
    return getattr(Equipment, f"{slot}_id")


class EquipmentRepository(EquipmentRepositoryProtocol):
    """SQLAlchemy data access for equipment."""

    async def get_character(self, db: AsyncSession, character_id: UUID) -> Optional[Character]:
        """Get the owning character."""
        result = await db.execute(select(Character).where(Character.id == character_id))
        return result.scalar_one_or_none()

    async def get_by_character(
        self, db: AsyncSession, character_id: UUID
    ) -> Optional[Equipment]:
        """Get a character's equipment row, if one exists."""
        result = await db.execute(
            select(Equipment).where(Equipment.character_id == character_id)
        )
        return result.scalar_one_or_none()

    async def get_items(self, db: AsyncSession, ids: Sequence[UUID]) -> List[Item]:
        """Get items by id. Missing ids are skipped."""
        if not ids:
            return []
        result = await db.execute(select(Item).where(Item.id.in_(list(ids))))
        return list(result.scalars().all())

    async def upsert(
        self, db: AsyncSession, *, character_id: UUID, slots: Dict[str, Optional[UUID]]
    ) -> Equipment:
        """Create the row if needed and apply slot assignments."""
        equipment = await self.get_by_character(db, character_id)
        if equipment is None:
            equipment = Equipment(character_id=character_id)
        for slot, item_id in slots.items():
            setattr(equipment, f"{slot}_id", item_id)
        db.add(equipment)
        await db.flush()
        return equipment

    async def aggregate_stats(self, db: AsyncSession) -> schemas.EquipmentStats:
        """Characters with at least one equipped slot and per-slot usage."""
        columns = [slot_column(slot) for slot in EQUIPMENT_SLOTS]
        equipped = await db.execute(
            select(func.count()).where(or_(*[c.is_not(None) for c in columns]))
        )
        usage = await db.execute(select(*[func.count(c) for c in columns]))
        counts = usage.one()
        return schemas.EquipmentStats(
            characters_with_equipment=int(equipped.scalar_one()),
            slot_usage={
                to_camel(slot): int(count)
                for slot, count in zip(EQUIPMENT_SLOTS, counts)
            },
        )
