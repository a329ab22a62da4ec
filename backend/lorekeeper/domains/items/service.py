"""Item service."""

from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy.sql.elements import ColumnElement

from lorekeeper import schemas
from lorekeeper.core.config import Settings
from lorekeeper.core.protocols import ListCache
from lorekeeper.domains.items.definition import ITEMS
from lorekeeper.domains.items.protocols import ItemServiceProtocol
from lorekeeper.domains.resources.protocols import ResourceRepositoryProtocol
from lorekeeper.domains.resources.service import ResourceService, range_conditions
from lorekeeper.schemas.pagination import ListQuery

# Filter field -> column for exact-match filters.
_EXACT_FILTERS = {
    "rarity": "rarity",
    "slot": "slot",
    "is_quest_item": "is_quest_item",
    "is_tradeable": "is_tradeable",
    "is_2_handed": "is_2_handed",
}


class ItemService(ResourceService[schemas.Item], ItemServiceProtocol):
    """Items add rarity, slot, level and flag filters.

    Deleting an item that is still equipped fails with RESOURCE_IN_USE;
    inventory links are removed with the item.
    """

    def __init__(
        self, repo: ResourceRepositoryProtocol, list_cache: ListCache, settings: Settings
    ) -> None:
        """Initialize with injected dependencies."""
        super().__init__(ITEMS, repo, list_cache, settings)

    def business_conditions(
        self, query: ListQuery, filters: Optional[BaseModel]
    ) -> List[ColumnElement[bool]]:
        """Generic conditions plus item filters."""
        conditions = super().business_conditions(query, filters)
        if filters is None:
            return conditions
        model = self.definition.model
        for field, column in _EXACT_FILTERS.items():
            value = getattr(filters, field)
            if value is not None:
                value = getattr(value, "value", value)
                conditions.append(getattr(model, column) == value)
        conditions += range_conditions(model, filters, {"required_level": "required_level"})
        return conditions
