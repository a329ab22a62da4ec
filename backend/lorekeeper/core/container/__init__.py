"""Dependency Injection Container Module.

This module provides the DI container and factory for wiring dependencies
across the application.

Usage:
------
    # Initialize at startup (call once from main.py)
    from lorekeeper.core.container import initialize_container
    from lorekeeper.core.config import settings
    initialize_container(settings)

    # In FastAPI deps.py
    def get_container() -> Container:
        return container

    # In tests (construct directly with fakes, don't use global)
    from lorekeeper.core.container import Container
    test_container = Container(
        tag_service=TagService(FakeResourceRepository(TAGS), ...),
        ...
    )

Module structure:
-----------------
    container/
    ├── __init__.py      # This file - exports public API
    ├── container.py     # Container dataclass (serves)
    └── factory.py       # create_container() (builds)
"""

from typing import TYPE_CHECKING

from lorekeeper.core.container.container import Container
from lorekeeper.core.container.factory import create_container

if TYPE_CHECKING:
    from lorekeeper.core.config import Settings

__all__ = ["Container", "create_container", "container", "initialize_container"]


# ---------------------------------------------------------------------------
# Global container instance
# ---------------------------------------------------------------------------

container: Container | None = None
"""Global container instance.

Initialized via `initialize_container()` at application startup and read
by api/deps.py. Domain code never imports it; domains receive their
dependencies through constructor parameters.
"""


def initialize_container(settings: "Settings") -> None:
    """Initialize the global container. Call once at startup.

    Args:
        settings: Application settings from core/config.py

    Raises:
        RuntimeError: If called more than once (container already initialized)
    """
    global container

    if container is not None:
        raise RuntimeError(
            "Container already initialized. "
            "initialize_container() should only be called once at startup."
        )

    container = create_container(settings)


def reset_container() -> None:
    """Reset the global container to None. For testing only.

    WARNING: Do not use in production code.
    """
    global container
    container = None
