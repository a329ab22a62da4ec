"""Skill schemas."""

from typing import List, Optional
from uuid import UUID

from pydantic import Field

from lorekeeper.schemas._base import CamelModel, OwnableCreate, OwnableRead, OwnableUpdate


class SkillFields(CamelModel):
    """Scalar skill attributes."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    required_level: int = Field(1, ge=1, le=100)
    image_id: Optional[UUID] = None


class SkillCreate(SkillFields, OwnableCreate):
    """Body for creating a skill."""

    tag_ids: Optional[List[UUID]] = None


class SkillUpdate(OwnableUpdate):
    """Body for updating a skill."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    required_level: Optional[int] = Field(None, ge=1, le=100)
    image_id: Optional[UUID] = None
    tag_ids: Optional[List[UUID]] = None


class Skill(SkillFields, OwnableRead):
    """Skill as returned by the API."""


class SkillFilters(CamelModel):
    """Skill-specific list filters."""

    min_required_level: Optional[int] = Field(None, ge=1)
    max_required_level: Optional[int] = Field(None, ge=1)
