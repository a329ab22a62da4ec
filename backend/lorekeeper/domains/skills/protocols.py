"""Protocols for the skill domain."""

from typing import Protocol

from lorekeeper.domains.resources.protocols import ResourceServiceProtocol


class SkillServiceProtocol(ResourceServiceProtocol, Protocol):
    """Skill operations."""
