"""Tag resource definition."""

from lorekeeper import schemas
from lorekeeper.domains.resources.types import ResourceDefinition, UsageSource
from lorekeeper.models import (
    Tag,
    archetype_tags,
    character_tags,
    item_tags,
    perk_tags,
    race_tags,
    skill_tags,
)

TAGS = ResourceDefinition(
    name="tags",
    label="Tag",
    model=Tag,
    read_schema=schemas.Tag,
    nullable_fields=("description",),
    usage=tuple(
        UsageSource(table, "tag_id")
        for table in (skill_tags, perk_tags, race_tags, archetype_tags, item_tags, character_tags)
    ),
)
