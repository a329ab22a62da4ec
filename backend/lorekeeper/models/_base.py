"""Declarative base classes for the models."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from lorekeeper.core.shared_models import Visibility


class Base(DeclarativeBase):
    """Base class for all models: UUID primary key plus timestamps."""

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class OwnableMixin:
    """Owner and visibility columns shared by every ownable resource.

    ``owner_id`` is set at creation and never changes. A NULL owner marks
    system content.
    """

    @declared_attr
    def owner_id(cls) -> Mapped[Optional[uuid.UUID]]:
        return mapped_column(
            UUID(as_uuid=True),
            ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )

    visibility: Mapped[str] = mapped_column(
        String(16), nullable=False, default=Visibility.PUBLIC.value, index=True
    )
