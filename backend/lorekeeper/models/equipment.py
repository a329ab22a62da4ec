"""Equipment model: one row per character, one nullable item reference per slot."""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from lorekeeper.models._base import Base


def _slot() -> Mapped[Optional[uuid.UUID]]:
    return mapped_column(
        UUID(as_uuid=True), ForeignKey("items.id", ondelete="RESTRICT"), nullable=True
    )


class Equipment(Base):
    """Items a character has equipped."""

    __tablename__ = "equipment"

    character_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("characters.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    head_id: Mapped[Optional[uuid.UUID]] = _slot()
    face_id: Mapped[Optional[uuid.UUID]] = _slot()
    chest_id: Mapped[Optional[uuid.UUID]] = _slot()
    legs_id: Mapped[Optional[uuid.UUID]] = _slot()
    feet_id: Mapped[Optional[uuid.UUID]] = _slot()
    hands_id: Mapped[Optional[uuid.UUID]] = _slot()
    right_hand_id: Mapped[Optional[uuid.UUID]] = _slot()
    left_hand_id: Mapped[Optional[uuid.UUID]] = _slot()
    right_ring_id: Mapped[Optional[uuid.UUID]] = _slot()
    left_ring_id: Mapped[Optional[uuid.UUID]] = _slot()
    amulet_id: Mapped[Optional[uuid.UUID]] = _slot()
    belt_id: Mapped[Optional[uuid.UUID]] = _slot()
    backpack_id: Mapped[Optional[uuid.UUID]] = _slot()
    cloak_id: Mapped[Optional[uuid.UUID]] = _slot()
