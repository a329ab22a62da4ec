"""Protocols for the item domain."""

from typing import Protocol

from lorekeeper.domains.resources.protocols import ResourceServiceProtocol


class ItemServiceProtocol(ResourceServiceProtocol, Protocol):
    """Item operations."""
