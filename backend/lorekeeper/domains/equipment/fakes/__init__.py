"""Fake implementations for equipment domain testing."""

from lorekeeper.domains.equipment.fakes.repository import FakeEquipmentRepository

__all__ = ["FakeEquipmentRepository"]
