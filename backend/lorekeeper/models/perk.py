"""Perk model."""

import uuid
from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lorekeeper.models._base import Base, OwnableMixin
from lorekeeper.models.associations import perk_tags
from lorekeeper.models.tag import Tag


class Perk(Base, OwnableMixin):
    """Perk model."""

    __tablename__ = "perks"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    required_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    image_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("images.id", ondelete="SET NULL"), nullable=True
    )

    tags: Mapped[List[Tag]] = relationship(Tag, secondary=perk_tags, lazy="noload")
