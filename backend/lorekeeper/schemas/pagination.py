"""List query and paginated response schemas."""

from typing import Generic, List, Optional, TypeVar
from uuid import UUID

from pydantic import Field

from lorekeeper.core.config import settings
from lorekeeper.core.shared_models import SortDirection, Visibility
from lorekeeper.schemas._base import CamelModel

T = TypeVar("T")

DEFAULT_LIMIT = settings.PAGINATION_DEFAULT_LIMIT
MAX_LIMIT = settings.PAGINATION_MAX_LIMIT


class ListQuery(CamelModel):
    """Caller-independent list parameters shared by every list endpoint."""

    search: Optional[str] = Field(None, description="Case-insensitive substring filter")
    visibility: Optional[Visibility] = None
    owner_id: Optional[UUID] = None
    sort_by: Optional[str] = Field(None, description="Allow-listed sort field")
    sort_dir: SortDirection = SortDirection.DESC
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    cursor: Optional[str] = Field(None, description="Opaque cursor from a previous page")


class PaginationMeta(CamelModel):
    """Pagination block of a list response."""

    limit: int
    has_next: bool
    has_prev: bool = Field(description="True when the request carried a cursor")
    next_cursor: Optional[str] = None
    prev_cursor: Optional[str] = None


class Page(CamelModel, Generic[T]):
    """A page of items plus its pagination block."""

    items: List[T]
    pagination: PaginationMeta
