"""Image resource definition.

Images have no name column: ``description`` is their display field, and the
``name`` sort key orders by it with NULL treated as an empty string.
"""

from datetime import datetime

from lorekeeper import schemas
from lorekeeper.core.pagination import SortField
from lorekeeper.domains.resources.types import ResourceDefinition, sort_fields
from lorekeeper.models import Image

IMAGES = ResourceDefinition(
    name="images",
    label="Image",
    model=Image,
    read_schema=schemas.Image,
    sort_fields=sort_fields(
        SortField("createdAt", "created_at", datetime),
        SortField("name", "description", str, null_value=""),
        SortField("size", "size", int),
        SortField("width", "width", int),
        SortField("height", "height", int),
        base={},
    ),
    search_columns=("description",),
    name_column="description",
    unique_name=False,
    nullable_fields=("description",),
)
