"""Schemas for the application."""

from .archetype import Archetype, ArchetypeCreate, ArchetypeUpdate
from ._base import CamelModel, OwnableCreate, OwnableRead, OwnableUpdate, ResourceSummary
from .character import (
    Character,
    CharacterCreate,
    CharacterExpanded,
    CharacterFilters,
    CharacterUpdate,
)
from .equipment import EQUIPMENT_SLOTS, Equipment, EquipmentSlots, EquipmentUpdate
from .errors import (
    ConflictErrorResponse,
    ErrorResponse,
    ForbiddenErrorResponse,
    NotFoundErrorResponse,
    ValidationErrorResponse,
)
from .image import Image, ImageCreate, ImageFilters, ImageUpdate
from .item import Item, ItemCreate, ItemFilters, ItemUpdate
from .pagination import ListQuery, Page, PaginationMeta
from .perk import Perk, PerkCreate, PerkFilters, PerkUpdate
from .race import Race, RaceCreate, RaceUpdate
from .skill import Skill, SkillCreate, SkillFilters, SkillUpdate
from .stats import (
    CharacterStats,
    EquipmentStats,
    ImageStats,
    ResourceStats,
    UsageEntry,
    UserStats,
)
from .tag import Tag, TagCreate, TagUpdate
from .user import BanRequest, PublicUser, User, UserFilters, UserUpdate
