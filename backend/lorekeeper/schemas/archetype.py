"""Archetype schemas."""

from typing import List, Optional
from uuid import UUID

from pydantic import Field

from lorekeeper.schemas._base import CamelModel, OwnableCreate, OwnableRead, OwnableUpdate


class ArchetypeFields(CamelModel):
    """Scalar archetype attributes."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    image_id: Optional[UUID] = None


class ArchetypeCreate(ArchetypeFields, OwnableCreate):
    """Body for creating an archetype."""

    skill_ids: Optional[List[UUID]] = None
    tag_ids: Optional[List[UUID]] = None


class ArchetypeUpdate(OwnableUpdate):
    """Body for updating an archetype."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    image_id: Optional[UUID] = None
    skill_ids: Optional[List[UUID]] = None
    tag_ids: Optional[List[UUID]] = None


class Archetype(ArchetypeFields, OwnableRead):
    """Archetype as returned by the API."""
