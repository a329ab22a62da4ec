"""Protocols for the image domain."""

from typing import Optional, Protocol, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper.api.context import ApiContext
from lorekeeper.domains.resources.protocols import (
    ResourceRepositoryProtocol,
    ResourceServiceProtocol,
)


class ImageRepositoryProtocol(ResourceRepositoryProtocol, Protocol):
    """Image data access, including the deferred binary payload."""

    async def get_blob(self, db: AsyncSession, id: UUID) -> Optional[bytes]:
        """Load the stored bytes of an image."""
        ...


class ImageServiceProtocol(ResourceServiceProtocol, Protocol):
    """Image operations."""

    async def get_file(
        self, db: AsyncSession, id: UUID, *, ctx: ApiContext
    ) -> Tuple[bytes, str]:
        """Return ``(bytes, mime type)`` of a viewable image."""
        ...
