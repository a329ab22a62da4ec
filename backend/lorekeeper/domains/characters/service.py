"""Character service."""

from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from lorekeeper import schemas
from lorekeeper.api.context import ApiContext
from lorekeeper.core.access_control import embed, mask
from lorekeeper.core.config import Settings
from lorekeeper.core.protocols import ListCache
from lorekeeper.domains.characters.definition import CHARACTERS
from lorekeeper.domains.characters.protocols import (
    CharacterRepositoryProtocol,
    CharacterServiceProtocol,
)
from lorekeeper.domains.equipment.protocols import EquipmentServiceProtocol
from lorekeeper.domains.resources.exceptions import ResourceNotFoundError
from lorekeeper.domains.resources.service import ResourceService, range_conditions
from lorekeeper.models import Archetype, Image, Race
from lorekeeper.schemas.pagination import ListQuery

# Column -> filter suffix for min/max filters.
_RANGE_FILTERS = {
    "level": "level",
    "experience": "experience",
    "strength": "strength",
    "dexterity": "dexterity",
    "intelligence": "intelligence",
}


def _as_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(value)
    except ValueError:
        return None


class CharacterService(ResourceService[schemas.Character], CharacterServiceProtocol):
    """Characters add attribute filters and an expanded view with embedded relations."""

    def __init__(
        self,
        repo: CharacterRepositoryProtocol,
        equipment_service: EquipmentServiceProtocol,
        list_cache: ListCache,
        settings: Settings,
    ) -> None:
        """Initialize with injected dependencies."""
        super().__init__(CHARACTERS, repo, list_cache, settings)
        self._character_repo = repo
        self._equipment = equipment_service

    def business_conditions(
        self, query: ListQuery, filters: Optional[BaseModel]
    ) -> List[ColumnElement[bool]]:
        """Generic conditions plus race, archetype, sex and attribute ranges."""
        conditions = super().business_conditions(query, filters)
        if filters is None:
            return conditions
        model = self.definition.model
        if filters.race_id is not None:
            conditions.append(model.race_id == filters.race_id)
        if filters.race:
            conditions.append(_reference_match(model.race_id, Race, filters.race))
        if filters.archetype_id is not None:
            conditions.append(model.archetype_id == filters.archetype_id)
        if filters.archetype:
            conditions.append(
                _reference_match(model.archetype_id, Archetype, filters.archetype)
            )
        if filters.sex is not None:
            conditions.append(model.sex == filters.sex.value)
        conditions += range_conditions(model, filters, _RANGE_FILTERS)
        return conditions

    async def get_expanded(
        self, db: AsyncSession, id: UUID, *, ctx: ApiContext
    ) -> schemas.CharacterExpanded:
        """Get a character with race, archetype, image, links and equipment embedded.

        Each embedded summary is masked under its own visibility, and rendered
        as a placeholder when the caller cannot view it. A masked character
        masks everything it embeds.

        Raises:
            ResourceNotFoundError: If absent or not viewable.
        """
        await self._get_viewable(db, id, ctx)
        character = await self._character_repo.get_expanded(db, id)
        if character is None:
            raise ResourceNotFoundError(self.definition.label, id)

        image = None
        if character.image_id is not None:
            images = await self._repo.get_many(db, Image, [character.image_id])
            image = self._summary(images[0], ctx) if images else None

        expanded = schemas.CharacterExpanded(
            **self.to_read(character).model_dump(),
            race=self._summary(character.race, ctx),
            archetype=self._summary(character.archetype, ctx),
            image=image,
            skills=[self._summary(s, ctx) for s in character.skills],
            perks=[self._summary(p, ctx) for p in character.perks],
            tags=[self._summary(t, ctx) for t in character.tags],
            inventory=[self._summary(i, ctx) for i in character.inventory],
            equipment=await self._equipment.render_slots(db, id, ctx=ctx),
        )
        return mask(expanded, ctx.caller)

    @staticmethod
    def _summary(obj: Any, ctx: ApiContext) -> schemas.ResourceSummary:
        summary = schemas.ResourceSummary.model_validate(obj, from_attributes=True)
        return embed(summary, ctx.caller)


def _reference_match(column: Any, model: Any, value: str) -> ColumnElement[bool]:
    """Match a foreign key by id when ``value`` is a UUID, else by name substring."""
    ref_id = _as_uuid(value)
    if ref_id is not None:
        return column == ref_id
    return column.in_(select(model.id).where(model.name.icontains(value, autoescape=True)))
