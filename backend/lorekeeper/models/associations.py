"""Many-to-many association tables."""

from sqlalchemy import Column, ForeignKey, Table
from sqlalchemy.dialects.postgresql import UUID

from lorekeeper.models._base import Base


def _link_table(name: str, left: str, right: str) -> Table:
    return Table(
        name,
        Base.metadata,
        Column(
            f"{left}_id",
            UUID(as_uuid=True),
            ForeignKey(f"{left}s.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(
            f"{right}_id",
            UUID(as_uuid=True),
            ForeignKey(f"{right}s.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


character_skills = _link_table("character_skills", "character", "skill")
character_perks = _link_table("character_perks", "character", "perk")
character_items = _link_table("character_items", "character", "item")
character_tags = _link_table("character_tags", "character", "tag")
item_tags = _link_table("item_tags", "item", "tag")
skill_tags = _link_table("skill_tags", "skill", "tag")
perk_tags = _link_table("perk_tags", "perk", "tag")
race_tags = _link_table("race_tags", "race", "tag")
archetype_tags = _link_table("archetype_tags", "archetype", "tag")
race_skills = _link_table("race_skills", "race", "skill")
archetype_skills = _link_table("archetype_skills", "archetype", "skill")
