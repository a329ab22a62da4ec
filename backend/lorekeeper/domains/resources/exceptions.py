"""Domain exceptions for the shared resource template."""

from uuid import UUID

from lorekeeper.core.exceptions import (
    ConflictException,
    NotFoundException,
    PermissionException,
    ResourceInUseException,
    ValidationException,
)


class ResourceNotFoundError(NotFoundException):
    """Raised when a resource is absent or concealed from the caller."""

    def __init__(self, label: str, id: UUID):
        """Initialize with the resource label and the requested id."""
        self.label = label
        self.id = id
        super().__init__(f"{label} not found")


class ResourceForbiddenError(PermissionException):
    """Raised when a viewable resource may not be modified by the caller."""

    def __init__(self, label: str, action: str):
        """Initialize with the resource label and the refused action."""
        self.label = label
        self.action = action
        super().__init__(f"You do not have permission to {action} this {label.lower()}")


class NameAlreadyExistsError(ConflictException):
    """Raised when a resource with the same name already exists."""

    def __init__(self, label: str, name: str):
        """Initialize with the duplicate name."""
        self.label = label
        self.name = name
        super().__init__(f"{label} with name '{name}' already exists")


class ResourceReferencedError(ResourceInUseException):
    """Raised when deleting a resource that other rows still reference."""

    def __init__(self, label: str, count: int, referenced_by: str):
        """Initialize with the number and kind of referencing rows."""
        self.label = label
        self.count = count
        self.referenced_by = referenced_by
        super().__init__(
            f"{label} is used by {count} {referenced_by} and cannot be deleted"
        )


class ReferenceNotFoundError(ValidationException):
    """Raised when a write body points at a resource the caller cannot see."""

    def __init__(self, label: str, id: UUID):
        """Initialize with the referenced kind and id."""
        self.label = label
        self.id = id
        super().__init__(f"{label} not found: {id}")
