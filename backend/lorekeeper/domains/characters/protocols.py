"""Protocols for the character domain."""

from typing import Optional, Protocol
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper import schemas
from lorekeeper.api.context import ApiContext
from lorekeeper.domains.resources.protocols import (
    ResourceRepositoryProtocol,
    ResourceServiceProtocol,
)
from lorekeeper.models import Character


class CharacterRepositoryProtocol(ResourceRepositoryProtocol, Protocol):
    """Character data access, including the expanded projection."""

    async def get_expanded(self, db: AsyncSession, id: UUID) -> Optional[Character]:
        """Get a character with race, archetype, skills, perks, inventory and tags loaded."""
        ...


class CharacterServiceProtocol(ResourceServiceProtocol, Protocol):
    """Character operations."""

    async def get_expanded(
        self, db: AsyncSession, id: UUID, *, ctx: ApiContext
    ) -> schemas.CharacterExpanded:
        """Get a character with its related resources embedded."""
        ...
