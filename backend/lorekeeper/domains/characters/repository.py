"""Character repository."""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lorekeeper.domains.characters.definition import CHARACTERS
from lorekeeper.domains.characters.protocols import CharacterRepositoryProtocol
from lorekeeper.domains.resources.repository import ResourceRepository
from lorekeeper.models import Archetype, Character, Race
from lorekeeper.schemas.stats import CharacterStats, UsageEntry


class CharacterRepository(ResourceRepository, CharacterRepositoryProtocol):
    """Shared resource repository plus the expanded projection and character stats."""

    def __init__(self) -> None:
        """Bind to the character definition."""
        super().__init__(CHARACTERS)

    async def get_expanded(self, db: AsyncSession, id: UUID) -> Optional[Character]:
        """Get a character with race, archetype, skills, perks, inventory and tags loaded."""
        stmt = (
            select(Character)
            .where(Character.id == id)
            .options(
                selectinload(Character.race),
                selectinload(Character.archetype),
                selectinload(Character.skills),
                selectinload(Character.perks),
                selectinload(Character.inventory),
                selectinload(Character.tags),
            )
            .execution_options(populate_existing=True)
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def aggregate_stats(
        self, db: AsyncSession, *, since: datetime, top_n: int
    ) -> CharacterStats:
        """Base statistics plus average level and the most played races and archetypes."""
        base = await self._base_stats(db, since=since, top_n=top_n)
        average = await db.execute(select(func.coalesce(func.avg(Character.level), 0)))
        return CharacterStats(
            **base,
            average_level=float(average.scalar_one()),
            top_races=await self._top(db, Race, Character.race_id, top_n),
            top_archetypes=await self._top(db, Archetype, Character.archetype_id, top_n),
        )

    async def _top(
        self, db: AsyncSession, model: Any, column: Any, top_n: int
    ) -> List[UsageEntry]:
        count = func.count(Character.id)
        stmt = (
            select(model.id, model.name, count)
            .join(Character, column == model.id)
            .group_by(model.id, model.name)
            .order_by(count.desc(), model.name.asc())
            .limit(top_n)
        )
        result = await db.execute(stmt)
        return [
            UsageEntry(id=row_id, name=name, usage_count=int(n)) for row_id, name, n in result.all()
        ]
