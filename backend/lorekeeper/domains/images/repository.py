"""Image repository."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper.domains.images.definition import IMAGES
from lorekeeper.domains.images.protocols import ImageRepositoryProtocol
from lorekeeper.domains.resources.repository import ResourceRepository
from lorekeeper.models import Image
from lorekeeper.schemas.stats import ImageStats


class ImageRepository(ResourceRepository, ImageRepositoryProtocol):
    """Shared resource repository plus blob access and size statistics."""

    def __init__(self) -> None:
        """Bind to the image definition."""
        super().__init__(IMAGES)

    async def get_blob(self, db: AsyncSession, id: UUID) -> Optional[bytes]:
        """Load the stored bytes of an image."""
        result = await db.execute(select(Image.blob).where(Image.id == id))
        return result.scalar_one_or_none()

    async def aggregate_stats(
        self, db: AsyncSession, *, since: datetime, top_n: int
    ) -> ImageStats:
        """Base statistics plus total and average payload size."""
        base = await self._base_stats(db, since=since, top_n=top_n)
        result = await db.execute(select(func.coalesce(func.sum(Image.size), 0)))
        total_size = int(result.scalar_one())
        average = total_size / base["total"] if base["total"] else 0.0
        return ImageStats(**base, total_size=total_size, average_size=average)
