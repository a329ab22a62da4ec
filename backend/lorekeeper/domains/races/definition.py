"""Race resource definition."""

from lorekeeper import schemas
from lorekeeper.domains.resources.types import (
    ReferenceCheck,
    ReferenceSpec,
    RelationSpec,
    ResourceDefinition,
    UsageSource,
)
from lorekeeper.models import Character, Image, Race, Skill, Tag, race_skills, race_tags

RACES = ResourceDefinition(
    name="races",
    label="Race",
    model=Race,
    read_schema=schemas.Race,
    relations=(
        RelationSpec("skill_ids", "skills", Skill, "Skill"),
        RelationSpec("tag_ids", "tags", Tag, "Tag"),
    ),
    references=(ReferenceSpec("image_id", Image, "Image"),),
    delete_checks=(ReferenceCheck(Character, "race_id", "characters"),),
    usage=(
        UsageSource(Character.__table__, "race_id"),
        UsageSource(race_skills, "race_id"),
        UsageSource(race_tags, "race_id"),
    ),
)
