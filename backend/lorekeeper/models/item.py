"""Item model."""

import uuid
from typing import List, Optional

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lorekeeper.core.shared_models import ItemSlot, Rarity
from lorekeeper.models._base import Base, OwnableMixin
from lorekeeper.models.associations import item_tags
from lorekeeper.models.tag import Tag


class Item(Base, OwnableMixin):
    """Item that characters carry or equip."""

    __tablename__ = "items"

    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rarity: Mapped[str] = mapped_column(String(16), nullable=False, default=Rarity.COMMON.value)
    slot: Mapped[str] = mapped_column(String(16), nullable=False, default=ItemSlot.NONE.value)
    required_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    durability: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    max_durability: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_2_handed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_throwable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_consumable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_quest_item: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_tradeable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    image_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("images.id", ondelete="SET NULL"), nullable=True
    )

    tags: Mapped[List[Tag]] = relationship(Tag, secondary=item_tags, lazy="noload")

    @property
    def is_two_handed(self) -> bool:
        """Two-handed either by flag or by slot kind."""
        return bool(self.is_2_handed) or self.slot == ItemSlot.TWO_HANDS.value
