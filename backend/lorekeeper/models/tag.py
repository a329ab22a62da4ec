"""Tag model."""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lorekeeper.models._base import Base, OwnableMixin


class Tag(Base, OwnableMixin):
    """Free-form label attached to skills, perks, races, archetypes, items and characters."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
