"""Equipment schemas."""

from typing import Optional
from uuid import UUID

from lorekeeper.schemas._base import CamelModel, ResourceSummary

EQUIPMENT_SLOTS = (
    "head",
    "face",
    "chest",
    "legs",
    "feet",
    "hands",
    "right_hand",
    "left_hand",
    "right_ring",
    "left_ring",
    "amulet",
    "belt",
    "backpack",
    "cloak",
)


class EquipmentSlots(CamelModel):
    """Equipped items per slot. ``None`` means the slot is empty."""

    head: Optional[ResourceSummary] = None
    face: Optional[ResourceSummary] = None
    chest: Optional[ResourceSummary] = None
    legs: Optional[ResourceSummary] = None
    feet: Optional[ResourceSummary] = None
    hands: Optional[ResourceSummary] = None
    right_hand: Optional[ResourceSummary] = None
    left_hand: Optional[ResourceSummary] = None
    right_ring: Optional[ResourceSummary] = None
    left_ring: Optional[ResourceSummary] = None
    amulet: Optional[ResourceSummary] = None
    belt: Optional[ResourceSummary] = None
    backpack: Optional[ResourceSummary] = None
    cloak: Optional[ResourceSummary] = None


class Equipment(EquipmentSlots):
    """A character's equipment."""

    character_id: UUID


class EquipmentUpdate(CamelModel):
    """Slot assignments. A field set to null empties the slot; omitted fields are kept."""

    head_id: Optional[UUID] = None
    face_id: Optional[UUID] = None
    chest_id: Optional[UUID] = None
    legs_id: Optional[UUID] = None
    feet_id: Optional[UUID] = None
    hands_id: Optional[UUID] = None
    right_hand_id: Optional[UUID] = None
    left_hand_id: Optional[UUID] = None
    right_ring_id: Optional[UUID] = None
    left_ring_id: Optional[UUID] = None
    amulet_id: Optional[UUID] = None
    belt_id: Optional[UUID] = None
    backpack_id: Optional[UUID] = None
    cloak_id: Optional[UUID] = None
