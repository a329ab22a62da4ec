"""Image service.

Payloads arrive base64-encoded in JSON. The decoded size is stored next to
the bytes; the bytes themselves are only served by ``get_file``.
"""

import base64
import binascii
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from lorekeeper import schemas
from lorekeeper.api.context import ApiContext
from lorekeeper.core.config import Settings
from lorekeeper.core.exceptions import ValidationException
from lorekeeper.core.protocols import ListCache
from lorekeeper.domains.images.definition import IMAGES
from lorekeeper.domains.images.protocols import ImageRepositoryProtocol, ImageServiceProtocol
from lorekeeper.domains.resources.exceptions import ResourceNotFoundError
from lorekeeper.domains.resources.service import ResourceService, range_conditions
from lorekeeper.schemas.image import SUPPORTED_MIME_TYPES
from lorekeeper.schemas.pagination import ListQuery


class ImageService(ResourceService[schemas.Image], ImageServiceProtocol):
    """Stores, lists and serves images."""

    def __init__(
        self, repo: ImageRepositoryProtocol, list_cache: ListCache, settings: Settings
    ) -> None:
        """Initialize with injected dependencies."""
        super().__init__(IMAGES, repo, list_cache, settings)
        self._image_repo = repo

    def business_conditions(
        self, query: ListQuery, filters: Optional[BaseModel]
    ) -> List[ColumnElement[bool]]:
        """Generic conditions plus mime type and dimension filters."""
        conditions = super().business_conditions(query, filters)
        if filters is None:
            return conditions
        model = self.definition.model
        if filters.mime_type:
            conditions.append(model.mime_type == filters.mime_type)
        conditions += range_conditions(model, filters, {"width": "width", "height": "height"})
        return conditions

    def create_values(self, obj_in: BaseModel) -> Dict[str, Any]:
        """Decode and validate the payload.

        Raises:
            ValidationException: Unsupported mime type, undecodable data or a
                payload above ``MAX_IMAGE_BYTES``.
        """
        if obj_in.mime_type not in SUPPORTED_MIME_TYPES:
            allowed = ", ".join(sorted(SUPPORTED_MIME_TYPES))
            raise ValidationException(
                f"Unsupported mime type '{obj_in.mime_type}'. Allowed: {allowed}"
            )
        try:
            blob = base64.b64decode(obj_in.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationException("Image data is not valid base64") from e
        if not blob:
            raise ValidationException("Image data is empty")
        if len(blob) > self._settings.MAX_IMAGE_BYTES:
            raise ValidationException(
                f"Image exceeds the maximum size of {self._settings.MAX_IMAGE_BYTES} bytes"
            )
        values = obj_in.model_dump(exclude={"owner_id", "data"})
        values.update(blob=blob, size=len(blob))
        return values

    async def get_file(
        self, db: AsyncSession, id: UUID, *, ctx: ApiContext
    ) -> Tuple[bytes, str]:
        """Return ``(bytes, mime type)`` of a viewable image.

        HIDDEN images are served as-is; masking only applies to text fields.

        Raises:
            ResourceNotFoundError: If absent or not viewable.
        """
        db_obj = await self._get_viewable(db, id, ctx)
        blob = await self._image_repo.get_blob(db, id)
        if blob is None:
            raise ResourceNotFoundError(self.definition.label, id)
        return blob, db_obj.mime_type
