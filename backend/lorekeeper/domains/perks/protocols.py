"""Protocols for the perk domain."""

from typing import Protocol

from lorekeeper.domains.resources.protocols import ResourceServiceProtocol


class PerkServiceProtocol(ResourceServiceProtocol, Protocol):
    """Perk operations."""
