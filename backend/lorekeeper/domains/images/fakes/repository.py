"""Fake image repository for testing."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper.domains.images.definition import IMAGES
from lorekeeper.domains.resources.fakes.repository import FakeResourceRepository
from lorekeeper.schemas.stats import ImageStats


class FakeImageRepository(FakeResourceRepository):
    """In-memory fake for ImageRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with empty stores."""
        super().__init__(IMAGES)

    async def get_blob(self, db: AsyncSession, id: UUID) -> Optional[bytes]:
        """Return the seeded image's bytes."""
        self._calls.append(("get_blob", id))
        obj = self._store.get(id)
        return None if obj is None else obj.blob

    async def aggregate_stats(
        self, db: AsyncSession, *, since: datetime, top_n: int
    ) -> ImageStats:
        """Counts computed from the store plus size totals."""
        base = await super().aggregate_stats(db, since=since, top_n=top_n)
        sizes = [obj.size for obj in self._store.values()]
        return ImageStats(
            **base.model_dump(),
            total_size=sum(sizes),
            average_size=sum(sizes) / len(sizes) if sizes else 0.0,
        )
