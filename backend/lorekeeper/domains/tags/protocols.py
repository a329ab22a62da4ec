"""Protocols for the tag domain."""

from typing import Protocol

from lorekeeper.domains.resources.protocols import ResourceServiceProtocol


class TagServiceProtocol(ResourceServiceProtocol, Protocol):
    """Tag operations."""
