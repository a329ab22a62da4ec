"""Item schemas."""

from typing import List, Optional
from uuid import UUID

from pydantic import Field

from lorekeeper.core.shared_models import ItemSlot, Rarity
from lorekeeper.schemas._base import CamelModel, OwnableCreate, OwnableRead, OwnableUpdate


class ItemFields(CamelModel):
    """Scalar item attributes."""

    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = Field(None, max_length=4000)
    rarity: Rarity = Rarity.COMMON
    slot: ItemSlot = ItemSlot.NONE
    required_level: int = Field(1, ge=1)
    weight: float = Field(1.0, ge=0)
    durability: int = Field(100, ge=0)
    max_durability: int = Field(100, ge=0)
    value: int = Field(0, ge=0)
    is_2_handed: bool = False
    is_throwable: bool = False
    is_consumable: bool = False
    is_quest_item: bool = False
    is_tradeable: bool = True
    image_id: Optional[UUID] = None


class ItemCreate(ItemFields, OwnableCreate):
    """Body for creating an item."""

    tag_ids: Optional[List[UUID]] = None


class ItemUpdate(OwnableUpdate):
    """Body for updating an item."""

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = Field(None, max_length=4000)
    rarity: Optional[Rarity] = None
    slot: Optional[ItemSlot] = None
    required_level: Optional[int] = Field(None, ge=1)
    weight: Optional[float] = Field(None, ge=0)
    durability: Optional[int] = Field(None, ge=0)
    max_durability: Optional[int] = Field(None, ge=0)
    value: Optional[int] = Field(None, ge=0)
    is_2_handed: Optional[bool] = None
    is_throwable: Optional[bool] = None
    is_consumable: Optional[bool] = None
    is_quest_item: Optional[bool] = None
    is_tradeable: Optional[bool] = None
    image_id: Optional[UUID] = None
    tag_ids: Optional[List[UUID]] = None


class Item(ItemFields, OwnableRead):
    """Item as returned by the API."""


class ItemFilters(CamelModel):
    """Item-specific list filters."""

    rarity: Optional[Rarity] = None
    slot: Optional[ItemSlot] = None
    min_required_level: Optional[int] = Field(None, ge=1)
    max_required_level: Optional[int] = Field(None, ge=1)
    is_quest_item: Optional[bool] = None
    is_tradeable: Optional[bool] = None
    is_2_handed: Optional[bool] = None
