"""Container Factory.

All construction logic lives here. The factory reads settings and builds
the container with environment-appropriate implementations.

Design principles:
- Single place for all wiring decisions
- Fail fast: broken wiring crashes at startup, not at 3am
- Testable: can unit test factory logic with mock settings
"""

from lorekeeper.adapters.identity.jose_verifier import JoseTokenVerifier
from lorekeeper.adapters.list_cache.in_memory import InMemoryListCache
from lorekeeper.core.config import Settings
from lorekeeper.core.container.container import Container
from lorekeeper.core.logging import logger
from lorekeeper.domains.archetypes.definition import ARCHETYPES
from lorekeeper.domains.archetypes.service import ArchetypeService
from lorekeeper.domains.characters.repository import CharacterRepository
from lorekeeper.domains.characters.service import CharacterService
from lorekeeper.domains.equipment.repository import EquipmentRepository
from lorekeeper.domains.equipment.service import EquipmentService
from lorekeeper.domains.images.repository import ImageRepository
from lorekeeper.domains.images.service import ImageService
from lorekeeper.domains.items.definition import ITEMS
from lorekeeper.domains.items.service import ItemService
from lorekeeper.domains.perks.definition import PERKS
from lorekeeper.domains.perks.service import PerkService
from lorekeeper.domains.races.definition import RACES
from lorekeeper.domains.races.service import RaceService
from lorekeeper.domains.resources.repository import ResourceRepository
from lorekeeper.domains.skills.definition import SKILLS
from lorekeeper.domains.skills.service import SkillService
from lorekeeper.domains.tags.definition import TAGS
from lorekeeper.domains.tags.service import TagService
from lorekeeper.domains.users.repository import UserRepository
from lorekeeper.domains.users.service import UserService


def create_container(settings: Settings) -> Container:
    """Build container with environment-appropriate implementations.

    This is the single source of truth for dependency wiring.

    Args:
        settings: Application settings (from core/config.py)

    Returns:
        Fully constructed Container ready for use
    """
    # -----------------------------------------------------------------
    # Adapters
    # -----------------------------------------------------------------
    list_cache = InMemoryListCache(
        ttl_seconds=settings.LIST_CACHE_TTL_SECONDS,
        max_entries=settings.LIST_CACHE_MAX_ENTRIES,
    )
    token_verifier = _create_token_verifier(settings)

    # -----------------------------------------------------------------
    # Resource services (one generic repository per definition)
    # -----------------------------------------------------------------
    equipment_service = EquipmentService(equipment_repo=EquipmentRepository())

    character_service = CharacterService(
        repo=CharacterRepository(),
        equipment_service=equipment_service,
        list_cache=list_cache,
        settings=settings,
    )

    return Container(
        character_service=character_service,
        item_service=ItemService(ResourceRepository(ITEMS), list_cache, settings),
        race_service=RaceService(ResourceRepository(RACES), list_cache, settings),
        archetype_service=ArchetypeService(ResourceRepository(ARCHETYPES), list_cache, settings),
        perk_service=PerkService(ResourceRepository(PERKS), list_cache, settings),
        skill_service=SkillService(ResourceRepository(SKILLS), list_cache, settings),
        tag_service=TagService(ResourceRepository(TAGS), list_cache, settings),
        image_service=ImageService(ImageRepository(), list_cache, settings),
        equipment_service=equipment_service,
        user_service=UserService(
            user_repo=UserRepository(), list_cache=list_cache, settings=settings
        ),
        list_cache=list_cache,
        token_verifier=token_verifier,
    )


def _create_token_verifier(settings: Settings) -> JoseTokenVerifier:
    """Build the bearer token verifier.

    With AUTH_ENABLED=false every request runs as FIRST_SUPERUSER and the
    verifier is never consulted, so an empty key is only a warning.
    """
    if settings.AUTH_ENABLED and not settings.JWT_SECRET_KEY:
        raise ValueError("JWT_SECRET_KEY must be set when AUTH_ENABLED is true")
    if not settings.JWT_SECRET_KEY:
        logger.warning("JWT_SECRET_KEY is empty; bearer tokens will be rejected")
    return JoseTokenVerifier(secret_key=settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
