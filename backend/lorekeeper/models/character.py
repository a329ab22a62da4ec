"""Character model."""

import uuid
from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lorekeeper.core.shared_models import Sex
from lorekeeper.models._base import Base, OwnableMixin
from lorekeeper.models.archetype import Archetype
from lorekeeper.models.associations import (
    character_items,
    character_perks,
    character_skills,
    character_tags,
)
from lorekeeper.models.item import Item
from lorekeeper.models.perk import Perk
from lorekeeper.models.race import Race
from lorekeeper.models.skill import Skill
from lorekeeper.models.tag import Tag


class Character(Base, OwnableMixin):
    """Player or non-player character."""

    __tablename__ = "characters"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1, index=True)
    experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    health: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    mana: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    stamina: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    strength: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    constitution: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    dexterity: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    intelligence: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    wisdom: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    charisma: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=18)
    sex: Mapped[str] = mapped_column(String(8), nullable=False, default=Sex.MALE.value)
    image_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("images.id", ondelete="SET NULL"), nullable=True
    )
    race_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("races.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    archetype_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("archetypes.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    race: Mapped[Race] = relationship(Race, lazy="noload")
    archetype: Mapped[Archetype] = relationship(Archetype, lazy="noload")
    skills: Mapped[List[Skill]] = relationship(Skill, secondary=character_skills, lazy="noload")
    perks: Mapped[List[Perk]] = relationship(Perk, secondary=character_perks, lazy="noload")
    inventory: Mapped[List[Item]] = relationship(Item, secondary=character_items, lazy="noload")
    tags: Mapped[List[Tag]] = relationship(Tag, secondary=character_tags, lazy="noload")
