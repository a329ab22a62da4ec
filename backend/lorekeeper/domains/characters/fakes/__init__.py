"""Fake implementations for characters domain testing."""

from lorekeeper.domains.characters.fakes.repository import FakeCharacterRepository

__all__ = ["FakeCharacterRepository"]
