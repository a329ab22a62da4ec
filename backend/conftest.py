"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and lorekeeper/),
making its fixtures available to centralized tests AND colocated domain tests.
"""

import os
from unittest.mock import AsyncMock

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables. Must be set before any lorekeeper module import.
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_USER", "test_user")
os.environ.setdefault("POSTGRES_PASSWORD", "test_password")
os.environ.setdefault("POSTGRES_DB", "test_db")
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("AUTH_ENABLED", "true")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-minimum-32-characters-long")
os.environ.setdefault("FIRST_SUPERUSER", "00000000-0000-0000-0000-000000000001")


# ---------------------------------------------------------------------------
# Database session
# ---------------------------------------------------------------------------


@pytest.fixture
def db():
    """Stand-in AsyncSession. Fake repositories never touch it; UnitOfWork
    commits and rollbacks are recorded for assertions."""
    return AsyncMock()


# ---------------------------------------------------------------------------
# Shared fake fixtures: individual protocol fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_list_cache():
    """Fake ListCache that records hits, misses and invalidations."""
    from lorekeeper.adapters.list_cache.fake import FakeListCache

    return FakeListCache()


@pytest.fixture
def fake_token_verifier():
    """Fake TokenVerifier mapping literal tokens to callers."""
    from lorekeeper.adapters.identity.fake import FakeTokenVerifier

    return FakeTokenVerifier()


@pytest.fixture
def fake_tag_repo():
    """In-memory tag repository."""
    from lorekeeper.domains.resources.fakes.repository import FakeResourceRepository
    from lorekeeper.domains.tags.definition import TAGS

    return FakeResourceRepository(TAGS)


@pytest.fixture
def fake_character_repo():
    """In-memory character repository."""
    from lorekeeper.domains.characters.fakes.repository import FakeCharacterRepository

    return FakeCharacterRepository()


@pytest.fixture
def fake_equipment_repo():
    """In-memory equipment repository."""
    from lorekeeper.domains.equipment.fakes.repository import FakeEquipmentRepository

    return FakeEquipmentRepository()


@pytest.fixture
def fake_image_repo():
    """In-memory image repository."""
    from lorekeeper.domains.images.fakes.repository import FakeImageRepository

    return FakeImageRepository()


@pytest.fixture
def fake_user_repo():
    """In-memory user repository."""
    from lorekeeper.domains.users.fakes.repository import FakeUserRepository

    return FakeUserRepository()


# ---------------------------------------------------------------------------
# Test container: real services over fake repositories
# ---------------------------------------------------------------------------


@pytest.fixture
def test_container(
    fake_list_cache,
    fake_token_verifier,
    fake_tag_repo,
    fake_character_repo,
    fake_equipment_repo,
    fake_image_repo,
    fake_user_repo,
):
    """A Container whose services run over in-memory fakes.

    Use this when testing code that receives a Container or individual
    protocols via dependency injection.

    For partial overrides, use container.replace():
        other = test_container.replace(list_cache=InMemoryListCache())
    """
    from lorekeeper.core.config import settings
    from lorekeeper.core.container import Container
    from lorekeeper.domains.archetypes.definition import ARCHETYPES
    from lorekeeper.domains.archetypes.service import ArchetypeService
    from lorekeeper.domains.characters.service import CharacterService
    from lorekeeper.domains.equipment.service import EquipmentService
    from lorekeeper.domains.images.service import ImageService
    from lorekeeper.domains.items.definition import ITEMS
    from lorekeeper.domains.items.service import ItemService
    from lorekeeper.domains.perks.definition import PERKS
    from lorekeeper.domains.perks.service import PerkService
    from lorekeeper.domains.races.definition import RACES
    from lorekeeper.domains.races.service import RaceService
    from lorekeeper.domains.resources.fakes.repository import FakeResourceRepository
    from lorekeeper.domains.skills.definition import SKILLS
    from lorekeeper.domains.skills.service import SkillService
    from lorekeeper.domains.tags.service import TagService
    from lorekeeper.domains.users.service import UserService

    equipment_service = EquipmentService(fake_equipment_repo)
    cache = fake_list_cache

    return Container(
        character_service=CharacterService(
            repo=fake_character_repo,
            equipment_service=equipment_service,
            list_cache=cache,
            settings=settings,
        ),
        item_service=ItemService(FakeResourceRepository(ITEMS), cache, settings),
        race_service=RaceService(FakeResourceRepository(RACES), cache, settings),
        archetype_service=ArchetypeService(FakeResourceRepository(ARCHETYPES), cache, settings),
        perk_service=PerkService(FakeResourceRepository(PERKS), cache, settings),
        skill_service=SkillService(FakeResourceRepository(SKILLS), cache, settings),
        tag_service=TagService(fake_tag_repo, cache, settings),
        image_service=ImageService(fake_image_repo, cache, settings),
        equipment_service=equipment_service,
        user_service=UserService(user_repo=fake_user_repo, list_cache=cache, settings=settings),
        list_cache=cache,
        token_verifier=fake_token_verifier,
    )
