"""Image schemas.

Images carry no name; their description is the display field. Binary
payloads travel base64-encoded in JSON and are never part of read models.
"""

from typing import Optional

from pydantic import Field

from lorekeeper.schemas._base import CamelModel, OwnableCreate, OwnableRead, OwnableUpdate

SUPPORTED_MIME_TYPES = frozenset({"image/webp", "image/png", "image/jpeg", "image/gif"})


class ImageCreate(OwnableCreate):
    """Body for uploading an image."""

    description: Optional[str] = Field(None, max_length=2000)
    mime_type: str = Field(..., description="One of image/webp, image/png, image/jpeg, image/gif")
    data: str = Field(..., description="Base64-encoded image bytes")
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)


class ImageUpdate(OwnableUpdate):
    """Body for updating image metadata."""

    description: Optional[str] = Field(None, max_length=2000)


class Image(OwnableRead):
    """Image metadata as returned by the API."""

    description: Optional[str] = None
    size: int
    mime_type: str
    width: int
    height: int


class ImageFilters(CamelModel):
    """Image-specific list filters."""

    mime_type: Optional[str] = None
    min_width: Optional[int] = Field(None, ge=1)
    max_width: Optional[int] = Field(None, ge=1)
    min_height: Optional[int] = Field(None, ge=1)
    max_height: Optional[int] = Field(None, ge=1)
