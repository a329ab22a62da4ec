"""Fake implementations for images domain testing."""

from lorekeeper.domains.images.fakes.repository import FakeImageRepository

__all__ = ["FakeImageRepository"]
