"""Models for the application."""

from ._base import Base, OwnableMixin
from .archetype import Archetype
from .associations import (
    archetype_skills,
    archetype_tags,
    character_items,
    character_perks,
    character_skills,
    character_tags,
    item_tags,
    perk_tags,
    race_skills,
    race_tags,
    skill_tags,
)
from .character import Character
from .equipment import Equipment
from .image import Image
from .item import Item
from .perk import Perk
from .race import Race
from .skill import Skill
from .tag import Tag
from .user import User
