"""Fake implementations for resources domain testing."""

from lorekeeper.domains.resources.fakes.repository import FakeResourceRepository

__all__ = ["FakeResourceRepository"]
