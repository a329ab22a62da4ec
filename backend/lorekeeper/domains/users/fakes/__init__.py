"""Fake implementations for users domain testing."""

from lorekeeper.domains.users.fakes.repository import FakeUserRepository

__all__ = ["FakeUserRepository"]
