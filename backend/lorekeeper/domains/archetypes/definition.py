"""Archetype resource definition."""

from lorekeeper import schemas
from lorekeeper.domains.resources.types import (
    ReferenceCheck,
    ReferenceSpec,
    RelationSpec,
    ResourceDefinition,
    UsageSource,
)
from lorekeeper.models import (
    Archetype,
    Character,
    Image,
    Skill,
    Tag,
    archetype_skills,
    archetype_tags,
)

ARCHETYPES = ResourceDefinition(
    name="archetypes",
    label="Archetype",
    model=Archetype,
    read_schema=schemas.Archetype,
    relations=(
        RelationSpec("skill_ids", "skills", Skill, "Skill"),
        RelationSpec("tag_ids", "tags", Tag, "Tag"),
    ),
    references=(ReferenceSpec("image_id", Image, "Image"),),
    delete_checks=(ReferenceCheck(Character, "archetype_id", "characters"),),
    usage=(
        UsageSource(Character.__table__, "archetype_id"),
        UsageSource(archetype_skills, "archetype_id"),
        UsageSource(archetype_tags, "archetype_id"),
    ),
)
