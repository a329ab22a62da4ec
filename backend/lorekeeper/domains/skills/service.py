"""Skill service."""

from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy.sql.elements import ColumnElement

from lorekeeper import schemas
from lorekeeper.core.config import Settings
from lorekeeper.core.protocols import ListCache
from lorekeeper.domains.skills.definition import SKILLS
from lorekeeper.domains.skills.protocols import SkillServiceProtocol
from lorekeeper.domains.resources.protocols import ResourceRepositoryProtocol
from lorekeeper.domains.resources.service import ResourceService, range_conditions
from lorekeeper.schemas.pagination import ListQuery


class SkillService(ResourceService[schemas.Skill], SkillServiceProtocol):
    """Skills filter on their required level."""

    def __init__(
        self, repo: ResourceRepositoryProtocol, list_cache: ListCache, settings: Settings
    ) -> None:
        """Initialize with injected dependencies."""
        super().__init__(SKILLS, repo, list_cache, settings)

    def business_conditions(
        self, query: ListQuery, filters: Optional[BaseModel]
    ) -> List[ColumnElement[bool]]:
        """Generic conditions plus the required level range."""
        conditions = super().business_conditions(query, filters)
        if filters is not None:
            conditions += range_conditions(
                self.definition.model, filters, {"required_level": "required_level"}
            )
        return conditions
