"""Character schemas."""

from typing import List, Optional
from uuid import UUID

from pydantic import Field

from lorekeeper.core.shared_models import Sex
from lorekeeper.schemas._base import (
    CamelModel,
    OwnableCreate,
    OwnableRead,
    OwnableUpdate,
    ResourceSummary,
)
from lorekeeper.schemas.equipment import EquipmentSlots


class CharacterFields(CamelModel):
    """Scalar character attributes."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=5000)
    level: int = Field(1, ge=1, le=1000)
    experience: int = Field(0, ge=0, le=1_000_000_000)
    health: int = Field(100, ge=0, le=1_000_000)
    mana: int = Field(100, ge=0, le=1_000_000)
    stamina: int = Field(100, ge=0, le=1_000_000)
    strength: int = Field(10, ge=0, le=10_000)
    constitution: int = Field(10, ge=0, le=10_000)
    dexterity: int = Field(10, ge=0, le=10_000)
    intelligence: int = Field(10, ge=0, le=10_000)
    wisdom: int = Field(10, ge=0, le=10_000)
    charisma: int = Field(10, ge=0, le=10_000)
    age: int = Field(18, ge=0, le=10_000)
    sex: Sex = Sex.MALE
    image_id: Optional[UUID] = None
    race_id: UUID
    archetype_id: UUID


class CharacterCreate(CharacterFields, OwnableCreate):
    """Body for creating a character."""

    skill_ids: Optional[List[UUID]] = None
    perk_ids: Optional[List[UUID]] = None
    item_ids: Optional[List[UUID]] = Field(None, description="Inventory item ids")
    tag_ids: Optional[List[UUID]] = None


class CharacterUpdate(OwnableUpdate):
    """Body for updating a character. Omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=5000)
    level: Optional[int] = Field(None, ge=1, le=1000)
    experience: Optional[int] = Field(None, ge=0, le=1_000_000_000)
    health: Optional[int] = Field(None, ge=0, le=1_000_000)
    mana: Optional[int] = Field(None, ge=0, le=1_000_000)
    stamina: Optional[int] = Field(None, ge=0, le=1_000_000)
    strength: Optional[int] = Field(None, ge=0, le=10_000)
    constitution: Optional[int] = Field(None, ge=0, le=10_000)
    dexterity: Optional[int] = Field(None, ge=0, le=10_000)
    intelligence: Optional[int] = Field(None, ge=0, le=10_000)
    wisdom: Optional[int] = Field(None, ge=0, le=10_000)
    charisma: Optional[int] = Field(None, ge=0, le=10_000)
    age: Optional[int] = Field(None, ge=0, le=10_000)
    sex: Optional[Sex] = None
    image_id: Optional[UUID] = None
    race_id: Optional[UUID] = None
    archetype_id: Optional[UUID] = None
    skill_ids: Optional[List[UUID]] = None
    perk_ids: Optional[List[UUID]] = None
    item_ids: Optional[List[UUID]] = None
    tag_ids: Optional[List[UUID]] = None


class Character(CharacterFields, OwnableRead):
    """Character as returned by the API."""


class CharacterExpanded(Character):
    """Character with its related resources embedded as summaries."""

    race: ResourceSummary
    archetype: ResourceSummary
    image: Optional[ResourceSummary] = None
    skills: List[ResourceSummary] = []
    perks: List[ResourceSummary] = []
    tags: List[ResourceSummary] = []
    inventory: List[ResourceSummary] = []
    equipment: EquipmentSlots = Field(default_factory=lambda: EquipmentSlots())


class CharacterFilters(CamelModel):
    """Character-specific list filters."""

    race_id: Optional[UUID] = None
    race: Optional[str] = Field(None, description="Race id or name substring")
    archetype_id: Optional[UUID] = None
    archetype: Optional[str] = Field(None, description="Archetype id or name substring")
    sex: Optional[Sex] = None
    min_level: Optional[int] = Field(None, ge=1)
    max_level: Optional[int] = Field(None, ge=1)
    min_experience: Optional[int] = Field(None, ge=0)
    max_experience: Optional[int] = Field(None, ge=0)
    min_strength: Optional[int] = Field(None, ge=0)
    max_strength: Optional[int] = Field(None, ge=0)
    min_dexterity: Optional[int] = Field(None, ge=0)
    max_dexterity: Optional[int] = Field(None, ge=0)
    min_intelligence: Optional[int] = Field(None, ge=0)
    max_intelligence: Optional[int] = Field(None, ge=0)
