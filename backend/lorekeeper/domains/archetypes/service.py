"""Archetype service."""

from lorekeeper import schemas
from lorekeeper.core.config import Settings
from lorekeeper.core.protocols import ListCache
from lorekeeper.domains.archetypes.definition import ARCHETYPES
from lorekeeper.domains.archetypes.protocols import ArchetypeServiceProtocol
from lorekeeper.domains.resources.protocols import ResourceRepositoryProtocol
from lorekeeper.domains.resources.service import ResourceService


class ArchetypeService(ResourceService[schemas.Archetype], ArchetypeServiceProtocol):
    """Archetypes cannot be deleted while characters still use them."""

    def __init__(
        self, repo: ResourceRepositoryProtocol, list_cache: ListCache, settings: Settings
    ) -> None:
        """Initialize with injected dependencies."""
        super().__init__(ARCHETYPES, repo, list_cache, settings)
