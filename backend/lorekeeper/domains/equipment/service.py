"""Equipment service.

Equipment hangs off a character: reads are gated by the character's
visibility and writes by the right to modify it. Equipped items render as
summaries; an item the caller cannot view renders as a masked placeholder,
and ``None`` always means an empty slot.
"""

from typing import Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.api.context import ApiContext
from lorekeeper.core.access_control import can_modify, can_view, embed
from lorekeeper.core.exceptions import PermissionException
from lorekeeper.core.shared_models import ItemSlot
from lorekeeper.db.unit_of_work import UnitOfWork
from lorekeeper.domains.equipment.exceptions import InvalidEquipmentError
from lorekeeper.domains.equipment.protocols import (
    EquipmentRepositoryProtocol,
    EquipmentServiceProtocol,
)
from lorekeeper.domains.resources.exceptions import (
    ReferenceNotFoundError,
    ResourceForbiddenError,
    ResourceNotFoundError,
)
from lorekeeper.models import Character, Equipment, Item
from lorekeeper.schemas.equipment import EQUIPMENT_SLOTS

# Item slot kind each equipment slot accepts.
SLOT_KINDS: Dict[str, ItemSlot] = {
    "head": ItemSlot.HEAD,
    "face": ItemSlot.FACE,
    "chest": ItemSlot.CHEST,
    "legs": ItemSlot.LEGS,
    "feet": ItemSlot.FEET,
    "hands": ItemSlot.TWO_HANDS,
    "right_hand": ItemSlot.ONE_HAND,
    "left_hand": ItemSlot.ONE_HAND,
    "right_ring": ItemSlot.RING,
    "left_ring": ItemSlot.RING,
    "amulet": ItemSlot.AMULET,
    "belt": ItemSlot.BELT,
    "backpack": ItemSlot.BACKPACK,
    "cloak": ItemSlot.CLOAK,
}

SINGLE_HANDS = ("right_hand", "left_hand")


class EquipmentService(EquipmentServiceProtocol):
    """Reads, validates and writes character equipment."""

    def __init__(self, equipment_repo: EquipmentRepositoryProtocol) -> None:
        """Initialize with injected dependencies."""
        self._repo = equipment_repo

    async def get(
        self, db: AsyncSession, character_id: UUID, *, ctx: ApiContext
    ) -> schemas.Equipment:
        """Get a character's equipment; every slot is empty when none was saved.

        Raises:
            ResourceNotFoundError: If the character is absent or not viewable.
        """
        await self._get_character(db, character_id, ctx)
        equipment = await self._repo.get_by_character(db, character_id)
        slots = await self._render(db, equipment, ctx)
        return schemas.Equipment(character_id=character_id, **slots.model_dump())

    async def render_slots(
        self, db: AsyncSession, character_id: UUID, *, ctx: ApiContext
    ) -> schemas.EquipmentSlots:
        """Equipped items as summaries, for callers that already gated the character."""
        equipment = await self._repo.get_by_character(db, character_id)
        return await self._render(db, equipment, ctx)

    async def update(
        self,
        db: AsyncSession,
        character_id: UUID,
        obj_in: schemas.EquipmentUpdate,
        *,
        ctx: ApiContext,
    ) -> schemas.Equipment:
        """Apply slot assignments. Omitted slots are kept, null slots are emptied.

        Raises:
            ResourceNotFoundError: If the character is absent or not viewable.
            ResourceForbiddenError: If the caller may not modify the character.
            ReferenceNotFoundError: If an item is absent or not viewable.
            InvalidEquipmentError: If the resulting equipment breaks a slot rule.
        """
        patch = {
            field[: -len("_id")]: getattr(obj_in, field) for field in obj_in.model_fields_set
        }

        async with UnitOfWork(db) as uow:
            character = await self._get_character(uow.session, character_id, ctx)
            if not can_modify(ctx.caller, character):
                raise ResourceForbiddenError("Character", "update")

            current = await self._repo.get_by_character(uow.session, character_id)
            merged = {slot: _slot_value(current, slot) for slot in EQUIPMENT_SLOTS}
            merged.update(patch)
            _check_hands(merged)
            await self._check_items(uow.session, patch, ctx)

            equipment = await self._repo.upsert(
                uow.session, character_id=character_id, slots=patch
            )

        ctx.logger.info(f"Updated equipment of character {character_id}")
        slots = await self._render(db, equipment, ctx)
        return schemas.Equipment(character_id=character_id, **slots.model_dump())

    async def get_stats(self, db: AsyncSession, *, ctx: ApiContext) -> schemas.EquipmentStats:
        """Aggregate equipment statistics.

        Raises:
            PermissionException: If the caller is not ADMIN or MODERATOR.
        """
        if not ctx.is_privileged:
            raise PermissionException("Only administrators and moderators can view statistics")
        return await self._repo.aggregate_stats(db)

    async def _get_character(
        self, db: AsyncSession, character_id: UUID, ctx: ApiContext
    ) -> Character:
        character = await self._repo.get_character(db, character_id)
        if character is None or not can_view(ctx.caller, character):
            raise ResourceNotFoundError("Character", character_id)
        return character

    async def _check_items(
        self, db: AsyncSession, patch: Dict[str, Optional[UUID]], ctx: ApiContext
    ) -> None:
        """Every newly assigned item must be viewable and fit its slot."""
        ids = [item_id for item_id in patch.values() if item_id is not None]
        items = {item.id: item for item in await self._repo.get_items(db, ids)}
        for slot, item_id in patch.items():
            if item_id is None:
                continue
            item = items.get(item_id)
            if item is None or not can_view(ctx.caller, item):
                raise ReferenceNotFoundError("Item", item_id)
            _check_fits(slot, item)

    async def _render(
        self, db: AsyncSession, equipment: Optional[Equipment], ctx: ApiContext
    ) -> schemas.EquipmentSlots:
        if equipment is None:
            return schemas.EquipmentSlots()
        assigned = {slot: _slot_value(equipment, slot) for slot in EQUIPMENT_SLOTS}
        ids = list({item_id for item_id in assigned.values() if item_id is not None})
        items = {item.id: item for item in await self._repo.get_items(db, ids)}
        rendered = {}
        for slot, item_id in assigned.items():
            item = items.get(item_id) if item_id is not None else None
            if item is not None:
                summary = schemas.ResourceSummary.model_validate(item, from_attributes=True)
                rendered[slot] = embed(summary, ctx.caller)
        return schemas.EquipmentSlots(**rendered)


def _slot_value(equipment: Optional[Equipment], slot: str) -> Optional[UUID]:
    if equipment is None:
        return None
    return getattr(equipment, f"{slot}_id")


def _check_hands(slots: Dict[str, Optional[UUID]]) -> None:
    if slots["hands"] is not None and any(slots[s] is not None for s in SINGLE_HANDS):
        raise InvalidEquipmentError(
            "Cannot equip a two-handed item together with right or left hand items"
        )
    right, left = slots["right_hand"], slots["left_hand"]
    if right is not None and right == left:
        raise InvalidEquipmentError("The same item cannot be equipped in both hands")


def _check_fits(slot: str, item: Item) -> None:
    if slot == "hands" and not item.is_two_handed:
        raise InvalidEquipmentError(f"Slot hands requires a two-handed item, got {item.id}")
    if slot in SINGLE_HANDS and item.is_two_handed:
        raise InvalidEquipmentError(f"Two-handed item {item.id} cannot be equipped in one hand")
    expected = SLOT_KINDS[slot]
    if item.slot != expected.value:
        raise InvalidEquipmentError(
            f"Item {item.id} cannot be equipped in slot {slot} (expected {expected.value})"
        )
