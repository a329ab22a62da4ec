"""Domain exceptions for users."""

from uuid import UUID

from lorekeeper.core.exceptions import ConflictException, NotFoundException


class UserNotFoundError(NotFoundException):
    """Raised when a user account does not exist."""

    def __init__(self, id: UUID):
        """Initialize with the requested id."""
        self.id = id
        super().__init__("User not found")


class EmailAlreadyExistsError(ConflictException):
    """Raised when an email address belongs to another account."""

    def __init__(self, email: str):
        """Initialize with the duplicate email."""
        self.email = email
        super().__init__("User with this email already exists")


class BanStateConflictError(ConflictException):
    """Raised when banning a banned user or unbanning one who is not banned."""
