"""Dependency Injection Container.

The container is a simple immutable dataclass that holds protocol implementations.
It has no construction logic; that belongs in the factory.

Design principles:
- Container serves, factory builds
- Fail fast: all construction at startup
- Type safety: fields are protocol types
- Testing: construct directly with fakes
"""

from dataclasses import dataclass, replace
from typing import Any

from lorekeeper.core.protocols import ListCache, TokenVerifier
from lorekeeper.domains.archetypes.protocols import ArchetypeServiceProtocol
from lorekeeper.domains.characters.protocols import CharacterServiceProtocol
from lorekeeper.domains.equipment.protocols import EquipmentServiceProtocol
from lorekeeper.domains.images.protocols import ImageServiceProtocol
from lorekeeper.domains.items.protocols import ItemServiceProtocol
from lorekeeper.domains.perks.protocols import PerkServiceProtocol
from lorekeeper.domains.races.protocols import RaceServiceProtocol
from lorekeeper.domains.skills.protocols import SkillServiceProtocol
from lorekeeper.domains.tags.protocols import TagServiceProtocol
from lorekeeper.domains.users.protocols import UserServiceProtocol


@dataclass(frozen=True)
class Container:
    """Immutable container holding all protocol implementations.

    Usage:
        # FastAPI endpoints: use Inject() to pull individual protocols
        from lorekeeper.api.deps import Inject
        async def list_tags(tag_service: TagServiceProtocol = Inject(TagServiceProtocol)):
            ...

        # Testing: construct directly with fakes (see backend/conftest.py
        # for the full test_container fixture)
        test_container = Container(tag_service=TagService(...), ...)
    """

    # Ownable resource services
    character_service: CharacterServiceProtocol
    item_service: ItemServiceProtocol
    race_service: RaceServiceProtocol
    archetype_service: ArchetypeServiceProtocol
    perk_service: PerkServiceProtocol
    skill_service: SkillServiceProtocol
    tag_service: TagServiceProtocol
    image_service: ImageServiceProtocol

    # Character equipment
    equipment_service: EquipmentServiceProtocol

    # User accounts
    user_service: UserServiceProtocol

    # Anonymous list page cache, shared by every resource service
    list_cache: ListCache

    # Bearer token verification
    token_verifier: TokenVerifier

    # -----------------------------------------------------------------
    # Convenience methods
    # -----------------------------------------------------------------

    def replace(self, **changes: Any) -> "Container":
        """Create a new container with some dependencies replaced.

        Useful for partial overrides in tests:

            modified = container.replace(token_verifier=FakeTokenVerifier())

        Args:
            **changes: Dependency name -> new implementation

        Returns:
            New Container with specified dependencies replaced
        """
        return replace(self, **changes)
