"""Shared exceptions module.

Every user-visible failure is one of the classes below. Each carries a stable
machine-readable ``code`` that the API layer serializes next to the message.
"""

from typing import Optional

from pydantic import ValidationError


class LorekeeperException(Exception):
    """Base exception for Lorekeeper services."""

    code: str = "INTERNAL_ERROR"

    def __init__(self, message: Optional[str] = "Unexpected error"):
        """Create a new LorekeeperException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class NotFoundException(LorekeeperException):
    """Exception raised when an object is absent or concealed from the caller."""

    code = "NOT_FOUND"

    def __init__(self, message: Optional[str] = "Object not found"):
        """Create a new NotFoundException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        super().__init__(message)


class PermissionException(LorekeeperException):
    """Exception raised when a caller does not have the right to perform an action."""

    code = "FORBIDDEN"

    def __init__(
        self,
        message: Optional[str] = "User does not have the right to perform this action",
    ):
        """Create a new PermissionException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        super().__init__(message)


class UnauthorizedException(LorekeeperException):
    """Exception raised when a bearer token cannot be verified."""

    code = "UNAUTHORIZED"

    def __init__(self, message: Optional[str] = "Invalid authentication credentials"):
        """Create a new UnauthorizedException instance."""
        super().__init__(message)


class ConflictException(LorekeeperException):
    """Exception raised when a write collides with existing state."""

    code = "CONFLICT"

    def __init__(self, message: Optional[str] = "Resource already exists"):
        """Create a new ConflictException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        super().__init__(message)


class ResourceInUseException(ConflictException):
    """Raised when deleting a resource that other records still reference."""

    code = "RESOURCE_IN_USE"

    def __init__(self, message: Optional[str] = "Resource is referenced and cannot be deleted"):
        """Create a new ResourceInUseException instance."""
        super().__init__(message)


class ValidationException(LorekeeperException):
    """Raised for malformed list queries, cursors and invalid write payloads."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: Optional[str] = "Invalid request"):
        """Create a new ValidationException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        super().__init__(message)


def unpack_validation_error(exc: ValidationError) -> dict:
    """Unpack a Pydantic validation error into a dictionary.

    Args:
    ----
        exc (ValidationError): The Pydantic validation error.

    Returns:
    -------
        dict: Field path mapped to the error message.

    """
    error_messages = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        message = error["msg"]
        error_messages.append({field: message})

    return {"errors": error_messages}
