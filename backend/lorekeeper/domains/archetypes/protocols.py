"""Protocols for the archetype domain."""

from typing import Protocol

from lorekeeper.domains.resources.protocols import ResourceServiceProtocol


class ArchetypeServiceProtocol(ResourceServiceProtocol, Protocol):
    """Archetype operations."""
