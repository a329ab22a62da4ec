"""Translation of storage integrity errors into domain exceptions."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from lorekeeper.core.exceptions import (
    ConflictException,
    LorekeeperException,
    ResourceInUseException,
    ValidationException,
)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def sqlstate(exc: IntegrityError) -> Optional[str]:
    """SQLSTATE of the driver error wrapped by ``exc``, if the driver exposes one."""
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def translate_integrity_error(
    exc: IntegrityError, label: str, *, deleting: bool = False
) -> LorekeeperException:
    """Map a unique or foreign key violation to the matching domain exception.

    A foreign key violation means "still referenced" while deleting and
    "points at a missing row" while writing.

    Returns the exception for the caller to raise; unknown violations become
    a generic conflict.
    """
    code = sqlstate(exc)
    if code == UNIQUE_VIOLATION:
        return ConflictException(f"{label} with this name already exists")
    if code == FOREIGN_KEY_VIOLATION:
        if deleting:
            return ResourceInUseException(f"{label} is referenced and cannot be deleted")
        return ValidationException(f"{label} references a resource that does not exist")
    return ConflictException(f"{label} conflicts with existing data")
