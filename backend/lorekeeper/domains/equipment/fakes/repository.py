"""Fake equipment repository for testing."""

from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID, uuid4

from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.models import Character, Equipment, Item
from lorekeeper.schemas.equipment import EQUIPMENT_SLOTS


class FakeEquipmentRepository:
    """In-memory fake for EquipmentRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with empty stores."""
        self._characters: Dict[UUID, Character] = {}
        self._items: Dict[UUID, Item] = {}
        self._equipment: Dict[UUID, Equipment] = {}
        self._calls: List[Tuple[Any, ...]] = []

    def seed_character(self, character: Character) -> Character:
        """Seed a character."""
        self._characters[character.id] = character
        return character

    def seed_item(self, item: Item) -> Item:
        """Seed an item."""
        self._items[item.id] = item
        return item

    def seed_equipment(self, character_id: UUID, **slots: Optional[UUID]) -> Equipment:
        """Seed an equipment row; keyword names are slot names."""
        equipment = Equipment(id=uuid4(), character_id=character_id)
        for slot, item_id in slots.items():
            setattr(equipment, f"{slot}_id", item_id)
        self._equipment[character_id] = equipment
        return equipment

    async def get_character(self, db: AsyncSession, character_id: UUID) -> Optional[Character]:
        """Return seeded character."""
        self._calls.append(("get_character", character_id))
        return self._characters.get(character_id)

    async def get_by_character(
        self, db: AsyncSession, character_id: UUID
    ) -> Optional[Equipment]:
        """Return seeded equipment."""
        self._calls.append(("get_by_character", character_id))
        return self._equipment.get(character_id)

    async def get_items(self, db: AsyncSession, ids: Sequence[UUID]) -> List[Item]:
        """Return seeded items by id."""
        self._calls.append(("get_items", list(ids)))
        return [self._items[i] for i in ids if i in self._items]

    async def upsert(
        self, db: AsyncSession, *, character_id: UUID, slots: Dict[str, Optional[UUID]]
    ) -> Equipment:
        """Create or update the stored row."""
        self._calls.append(("upsert", character_id, dict(slots)))
        equipment = self._equipment.get(character_id)
        if equipment is None:
            equipment = self.seed_equipment(character_id)
        for slot, item_id in slots.items():
            setattr(equipment, f"{slot}_id", item_id)
        return equipment

    async def aggregate_stats(self, db: AsyncSession) -> schemas.EquipmentStats:
        """Counts computed from the store."""
        self._calls.append(("aggregate_stats",))
        rows = list(self._equipment.values())
        usage = {
            to_camel(slot): sum(1 for r in rows if getattr(r, f"{slot}_id") is not None)
            for slot in EQUIPMENT_SLOTS
        }
        equipped = sum(
            1 for r in rows if any(getattr(r, f"{s}_id") is not None for s in EQUIPMENT_SLOTS)
        )
        return schemas.EquipmentStats(characters_with_equipment=equipped, slot_usage=usage)
