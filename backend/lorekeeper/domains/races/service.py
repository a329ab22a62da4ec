"""Race service."""

from lorekeeper import schemas
from lorekeeper.core.config import Settings
from lorekeeper.core.protocols import ListCache
from lorekeeper.domains.races.definition import RACES
from lorekeeper.domains.races.protocols import RaceServiceProtocol
from lorekeeper.domains.resources.protocols import ResourceRepositoryProtocol
from lorekeeper.domains.resources.service import ResourceService


class RaceService(ResourceService[schemas.Race], RaceServiceProtocol):
    """Races cannot be deleted while characters still use them."""

    def __init__(
        self, repo: ResourceRepositoryProtocol, list_cache: ListCache, settings: Settings
    ) -> None:
        """Initialize with injected dependencies."""
        super().__init__(RACES, repo, list_cache, settings)
