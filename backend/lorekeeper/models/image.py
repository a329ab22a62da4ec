"""Image model."""

from typing import Optional

from sqlalchemy import Integer, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, deferred, mapped_column

from lorekeeper.models._base import Base, OwnableMixin


class Image(Base, OwnableMixin):
    """Stored image. The blob is deferred so listings never load it."""

    __tablename__ = "images"

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(64), nullable=False)
    width: Mapped[int] = mapped_column(Integer, nullable=False)
    height: Mapped[int] = mapped_column(Integer, nullable=False)
    blob: Mapped[bytes] = deferred(mapped_column(LargeBinary, nullable=False))
