"""User schemas.

Users are not ownable. Callers see the full projection of their own account
(and of accounts they manage); everyone else gets ``PublicUser``.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from lorekeeper.core.shared_models import UserRole
from lorekeeper.schemas._base import CamelModel


class PublicUser(CamelModel):
    """Public profile of a user."""

    id: UUID
    name: Optional[str] = None
    bio: Optional[str] = None
    role: UserRole
    profile_picture_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime


class User(PublicUser):
    """Full account projection."""

    email: EmailStr
    is_email_verified: bool = False
    is_banned: bool = False
    ban_reason: Optional[str] = None
    banned_until: Optional[datetime] = None
    banned_by_id: Optional[UUID] = None
    last_login: Optional[datetime] = None


class UserUpdate(CamelModel):
    """Body for updating a user.

    ``name``, ``bio``, ``email`` and ``profilePictureId`` may be changed by the
    account holder; ``role`` and ``isEmailVerified`` require a manager.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=1000)
    email: Optional[EmailStr] = None
    profile_picture_id: Optional[UUID] = None
    role: Optional[UserRole] = None
    is_email_verified: Optional[bool] = None


class UserFilters(CamelModel):
    """User-specific list filters."""

    role: Optional[UserRole] = None
    is_banned: Optional[bool] = None
    is_email_verified: Optional[bool] = None


class BanRequest(CamelModel):
    """Body for banning a user."""

    ban_reason: Optional[str] = Field(None, max_length=500)
    banned_until: Optional[datetime] = Field(None, description="Omit for a permanent ban")
