"""Race schemas."""

from typing import List, Optional
from uuid import UUID

from pydantic import Field

from lorekeeper.schemas._base import CamelModel, OwnableCreate, OwnableRead, OwnableUpdate


class RaceFields(CamelModel):
    """Scalar race attributes: base stat modifiers applied to characters."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    health_modifier: int = Field(100, ge=0, le=1000)
    mana_modifier: int = Field(100, ge=0, le=1000)
    stamina_modifier: int = Field(100, ge=0, le=1000)
    strength_modifier: int = Field(10, ge=0, le=500)
    constitution_modifier: int = Field(10, ge=0, le=500)
    dexterity_modifier: int = Field(10, ge=0, le=500)
    intelligence_modifier: int = Field(10, ge=0, le=500)
    wisdom_modifier: int = Field(10, ge=0, le=500)
    charisma_modifier: int = Field(10, ge=0, le=500)
    image_id: Optional[UUID] = None


class RaceCreate(RaceFields, OwnableCreate):
    """Body for creating a race."""

    skill_ids: Optional[List[UUID]] = None
    tag_ids: Optional[List[UUID]] = None


class RaceUpdate(OwnableUpdate):
    """Body for updating a race."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    health_modifier: Optional[int] = Field(None, ge=0, le=1000)
    mana_modifier: Optional[int] = Field(None, ge=0, le=1000)
    stamina_modifier: Optional[int] = Field(None, ge=0, le=1000)
    strength_modifier: Optional[int] = Field(None, ge=0, le=500)
    constitution_modifier: Optional[int] = Field(None, ge=0, le=500)
    dexterity_modifier: Optional[int] = Field(None, ge=0, le=500)
    intelligence_modifier: Optional[int] = Field(None, ge=0, le=500)
    wisdom_modifier: Optional[int] = Field(None, ge=0, le=500)
    charisma_modifier: Optional[int] = Field(None, ge=0, le=500)
    image_id: Optional[UUID] = None
    skill_ids: Optional[List[UUID]] = None
    tag_ids: Optional[List[UUID]] = None


class Race(RaceFields, OwnableRead):
    """Race as returned by the API."""
