"""Tag schemas."""

from typing import Optional

from pydantic import Field

from lorekeeper.schemas._base import CamelModel, OwnableCreate, OwnableRead, OwnableUpdate


class TagFields(CamelModel):
    """Scalar tag attributes."""

    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=500)


class TagCreate(TagFields, OwnableCreate):
    """Body for creating a tag."""


class TagUpdate(OwnableUpdate):
    """Body for updating a tag."""

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=500)


class Tag(TagFields, OwnableRead):
    """Tag as returned by the API."""
