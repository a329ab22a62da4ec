"""Race model."""

import uuid
from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lorekeeper.models._base import Base, OwnableMixin
from lorekeeper.models.associations import race_skills, race_tags
from lorekeeper.models.skill import Skill
from lorekeeper.models.tag import Tag


class Race(Base, OwnableMixin):
    """Playable race with base stat modifiers."""

    __tablename__ = "races"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    health_modifier: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    mana_modifier: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    stamina_modifier: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    strength_modifier: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    constitution_modifier: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    dexterity_modifier: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    intelligence_modifier: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    wisdom_modifier: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    charisma_modifier: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    image_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("images.id", ondelete="SET NULL"), nullable=True
    )

    skills: Mapped[List[Skill]] = relationship(Skill, secondary=race_skills, lazy="noload")
    tags: Mapped[List[Tag]] = relationship(Tag, secondary=race_tags, lazy="noload")
