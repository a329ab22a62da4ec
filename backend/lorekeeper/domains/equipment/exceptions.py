"""Domain exceptions for equipment."""

from lorekeeper.core.exceptions import ValidationException


class InvalidEquipmentError(ValidationException):
    """Raised when slot assignments break an equipment rule."""
