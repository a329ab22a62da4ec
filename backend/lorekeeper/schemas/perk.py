"""Perk schemas."""

from typing import List, Optional
from uuid import UUID

from pydantic import Field

from lorekeeper.schemas._base import CamelModel, OwnableCreate, OwnableRead, OwnableUpdate


class PerkFields(CamelModel):
    """Scalar perk attributes."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    required_level: int = Field(1, ge=1, le=100)
    image_id: Optional[UUID] = None


class PerkCreate(PerkFields, OwnableCreate):
    """Body for creating a perk."""

    tag_ids: Optional[List[UUID]] = None


class PerkUpdate(OwnableUpdate):
    """Body for updating a perk."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    required_level: Optional[int] = Field(None, ge=1, le=100)
    image_id: Optional[UUID] = None
    tag_ids: Optional[List[UUID]] = None


class Perk(PerkFields, OwnableRead):
    """Perk as returned by the API."""


class PerkFilters(CamelModel):
    """Perk-specific list filters."""

    min_required_level: Optional[int] = Field(None, ge=1)
    max_required_level: Optional[int] = Field(None, ge=1)
