"""Character resource definition."""

from lorekeeper import schemas
from lorekeeper.core.pagination import SortField
from lorekeeper.domains.resources.types import (
    ReferenceSpec,
    RelationSpec,
    ResourceDefinition,
    sort_fields,
)
from lorekeeper.models import Archetype, Character, Image, Item, Perk, Race, Skill, Tag

CHARACTERS = ResourceDefinition(
    name="characters",
    label="Character",
    model=Character,
    read_schema=schemas.Character,
    sort_fields=sort_fields(
        SortField("level", "level", int),
        SortField("experience", "experience", int),
        SortField("strength", "strength", int),
        SortField("dexterity", "dexterity", int),
        SortField("intelligence", "intelligence", int),
    ),
    relations=(
        RelationSpec("skill_ids", "skills", Skill, "Skill"),
        RelationSpec("perk_ids", "perks", Perk, "Perk"),
        RelationSpec("item_ids", "inventory", Item, "Item"),
        RelationSpec("tag_ids", "tags", Tag, "Tag"),
    ),
    references=(
        ReferenceSpec("race_id", Race, "Race"),
        ReferenceSpec("archetype_id", Archetype, "Archetype"),
        ReferenceSpec("image_id", Image, "Image"),
    ),
)
