"""Perk resource definition."""

from lorekeeper import schemas
from lorekeeper.domains.resources.types import (
    ReferenceSpec,
    RelationSpec,
    ResourceDefinition,
    UsageSource,
)
from lorekeeper.models import Image, Perk, Tag, character_perks

PERKS = ResourceDefinition(
    name="perks",
    label="Perk",
    model=Perk,
    read_schema=schemas.Perk,
    relations=(RelationSpec("tag_ids", "tags", Tag, "Tag"),),
    references=(ReferenceSpec("image_id", Image, "Image"),),
    usage=(UsageSource(character_perks, "perk_id"),),
)
