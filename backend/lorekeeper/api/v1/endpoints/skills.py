"""Skills API endpoints."""

from lorekeeper import schemas
from lorekeeper.api.v1.resource_router import build_resource_router
from lorekeeper.domains.skills.protocols import SkillServiceProtocol

router = build_resource_router(
    SkillServiceProtocol,
    label="Skills",
    read_schema=schemas.Skill,
    create_schema=schemas.SkillCreate,
    update_schema=schemas.SkillUpdate,
    filters_schema=schemas.SkillFilters,
)
