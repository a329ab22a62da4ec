"""Base schema classes.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lorekeeper.core.shared_models import Visibility


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting either spelling."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OwnableRead(CamelModel):
    """Fields every ownable resource exposes."""

    id: UUID
    owner_id: Optional[UUID] = Field(None, description="Owner; null for system-owned content")
    visibility: Visibility
    created_at: datetime
    updated_at: datetime


class OwnableCreate(CamelModel):
    """Fields every ownable create body accepts."""

    visibility: Visibility = Field(
        Visibility.PUBLIC, description="Who can see the resource (defaults to PUBLIC)"
    )
    owner_id: Optional[UUID] = Field(
        None,
        description="Owner to assign; only ADMIN/MODERATOR may name someone else",
    )


class OwnableUpdate(CamelModel):
    """Fields every ownable update body accepts. Ownership cannot change."""

    visibility: Optional[Visibility] = None


class ResourceSummary(CamelModel):
    """Compact embedded reference to another resource."""

    id: UUID
    name: Optional[str] = None
    description: Optional[str] = None
    visibility: Visibility
    owner_id: Optional[UUID] = None
