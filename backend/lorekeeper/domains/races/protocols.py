"""Protocols for the race domain."""

from typing import Protocol

from lorekeeper.domains.resources.protocols import ResourceServiceProtocol


class RaceServiceProtocol(ResourceServiceProtocol, Protocol):
    """Race operations."""
