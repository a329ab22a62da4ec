"""Core protocols for dependency injection."""

from lorekeeper.core.protocols.identity import TokenVerifier
from lorekeeper.core.protocols.list_cache import (
    ALL_LISTS,
    ListCache,
    list_cache_key,
    list_cache_prefix,
)

__all__ = [
    "ALL_LISTS",
    "ListCache",
    "TokenVerifier",
    "list_cache_key",
    "list_cache_prefix",
]
