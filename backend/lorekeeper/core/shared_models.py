"""Shared enums used by models, schemas and domains."""

from enum import Enum


class Visibility(str, Enum):
    """Row-level visibility of an ownable resource.

    PUBLIC rows are visible to everyone. PRIVATE rows exist only for their
    owner and privileged callers. HIDDEN rows are listed for everyone but
    their display fields are masked for non-owners.
    """

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    HIDDEN = "HIDDEN"


class UserRole(str, Enum):
    """Caller role, ordered USER < MODERATOR < ADMIN."""

    USER = "USER"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


PRIVILEGED_ROLES = frozenset({UserRole.ADMIN, UserRole.MODERATOR})


class SortDirection(str, Enum):
    """Sort direction for list queries."""

    ASC = "asc"
    DESC = "desc"


class Sex(str, Enum):
    """Character sex."""

    MALE = "MALE"
    FEMALE = "FEMALE"


class Rarity(str, Enum):
    """Item rarity."""

    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    EPIC = "EPIC"
    LEGENDARY = "LEGENDARY"


class ItemSlot(str, Enum):
    """Equipment slot kind an item fits into."""

    NONE = "NONE"
    HEAD = "HEAD"
    FACE = "FACE"
    CHEST = "CHEST"
    LEGS = "LEGS"
    FEET = "FEET"
    HANDS = "HANDS"
    ONE_HAND = "ONE_HAND"
    TWO_HANDS = "TWO_HANDS"
    RING = "RING"
    AMULET = "AMULET"
    BELT = "BELT"
    BACKPACK = "BACKPACK"
    CLOAK = "CLOAK"


class AuthMethod(str, Enum):
    """How the caller of a request was identified."""

    SYSTEM = "system"
    TOKEN = "token"
    ANONYMOUS = "anonymous"
