"""Item resource definition."""

from lorekeeper import schemas
from lorekeeper.core.pagination import SortField
from lorekeeper.domains.resources.types import (
    ReferenceSpec,
    RelationSpec,
    ResourceDefinition,
    UsageSource,
    sort_fields,
)
from lorekeeper.models import Equipment, Image, Item, Tag, character_items
from lorekeeper.schemas.equipment import EQUIPMENT_SLOTS

ITEMS = ResourceDefinition(
    name="items",
    label="Item",
    model=Item,
    read_schema=schemas.Item,
    sort_fields=sort_fields(
        SortField("rarity", "rarity", str),
        SortField("requiredLevel", "required_level", int),
    ),
    relations=(RelationSpec("tag_ids", "tags", Tag, "Tag"),),
    references=(ReferenceSpec("image_id", Image, "Image"),),
    usage=(UsageSource(character_items, "item_id"),)
    + tuple(UsageSource(Equipment.__table__, f"{slot}_id") for slot in EQUIPMENT_SLOTS),
)
