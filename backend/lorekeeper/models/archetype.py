"""Archetype model."""

import uuid
from typing import List, Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lorekeeper.models._base import Base, OwnableMixin
from lorekeeper.models.associations import archetype_skills, archetype_tags
from lorekeeper.models.skill import Skill
from lorekeeper.models.tag import Tag


class Archetype(Base, OwnableMixin):
    """Character class such as warrior or mage."""

    __tablename__ = "archetypes"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("images.id", ondelete="SET NULL"), nullable=True
    )

    skills: Mapped[List[Skill]] = relationship(Skill, secondary=archetype_skills, lazy="noload")
    tags: Mapped[List[Tag]] = relationship(Tag, secondary=archetype_tags, lazy="noload")
