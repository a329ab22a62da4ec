"""Fake character repository for testing."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper.domains.characters.definition import CHARACTERS
from lorekeeper.domains.resources.fakes.repository import FakeResourceRepository
from lorekeeper.models import Character
from lorekeeper.schemas.stats import CharacterStats


class FakeCharacterRepository(FakeResourceRepository):
    """In-memory fake for CharacterRepositoryProtocol.

    Seeded characters are returned as-is by ``get_expanded``, so tests set
    the relationship attributes they want embedded.
    """

    def __init__(self) -> None:
        """Initialize with empty stores."""
        super().__init__(CHARACTERS)

    async def get_expanded(self, db: AsyncSession, id: UUID) -> Optional[Character]:
        """Return seeded character."""
        self._calls.append(("get_expanded", id))
        return self._store.get(id)

    async def aggregate_stats(
        self, db: AsyncSession, *, since: datetime, top_n: int
    ) -> CharacterStats:
        """Counts computed from the store plus the average level."""
        base = await super().aggregate_stats(db, since=since, top_n=top_n)
        levels = [obj.level for obj in self._store.values()]
        return CharacterStats(
            **base.model_dump(),
            average_level=sum(levels) / len(levels) if levels else 0.0,
        )
