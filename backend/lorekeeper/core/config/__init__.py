"""Configuration module for the Lorekeeper backend.

Usage:
    from lorekeeper.core.config import settings, Environment

    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from lorekeeper.core.config.enums import Environment
from lorekeeper.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "settings",
]

# Singleton settings instance
settings = Settings()
