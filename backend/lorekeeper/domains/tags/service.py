"""Tag service."""

from lorekeeper import schemas
from lorekeeper.core.config import Settings
from lorekeeper.core.protocols import ListCache
from lorekeeper.domains.resources.protocols import ResourceRepositoryProtocol
from lorekeeper.domains.resources.service import ResourceService
from lorekeeper.domains.tags.definition import TAGS
from lorekeeper.domains.tags.protocols import TagServiceProtocol


class TagService(ResourceService[schemas.Tag], TagServiceProtocol):
    """Tags need nothing beyond the shared template."""

    def __init__(
        self, repo: ResourceRepositoryProtocol, list_cache: ListCache, settings: Settings
    ) -> None:
        """Initialize with injected dependencies."""
        super().__init__(TAGS, repo, list_cache, settings)
