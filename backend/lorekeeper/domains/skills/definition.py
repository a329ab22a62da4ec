"""Skill resource definition."""

from lorekeeper import schemas
from lorekeeper.domains.resources.types import (
    ReferenceSpec,
    RelationSpec,
    ResourceDefinition,
    UsageSource,
)
from lorekeeper.models import Image, Skill, Tag, archetype_skills, character_skills, race_skills

SKILLS = ResourceDefinition(
    name="skills",
    label="Skill",
    model=Skill,
    read_schema=schemas.Skill,
    relations=(RelationSpec("tag_ids", "tags", Tag, "Tag"),),
    references=(ReferenceSpec("image_id", Image, "Image"),),
    usage=(
        UsageSource(character_skills, "skill_id"),
        UsageSource(race_skills, "skill_id"),
        UsageSource(archetype_skills, "skill_id"),
    ),
)
