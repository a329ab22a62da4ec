"""Aggregate statistics returned to privileged callers."""

from typing import Dict, List
from uuid import UUID

from lorekeeper.schemas._base import CamelModel

# Window behind every ``new_last_30_days`` counter.
NEW_WINDOW_DAYS = 30


class UsageEntry(CamelModel):
    """One row of a "most used" ranking."""

    id: UUID
    name: str
    usage_count: int


class ResourceStats(CamelModel):
    """Counts shared by every ownable resource type."""

    total: int
    public: int
    private: int
    hidden: int
    new_last_30_days: int
    most_used: List[UsageEntry] = []


class CharacterStats(ResourceStats):
    """Character statistics."""

    average_level: float
    top_races: List[UsageEntry] = []
    top_archetypes: List[UsageEntry] = []


class ImageStats(ResourceStats):
    """Image statistics."""

    total_size: int
    average_size: float


class EquipmentStats(CamelModel):
    """Equipment usage across characters."""

    characters_with_equipment: int
    slot_usage: Dict[str, int]


class UserStats(CamelModel):
    """User account statistics."""

    total: int
    active: int
    banned: int
    unverified: int
    by_role: Dict[str, int]
    new_last_30_days: int
