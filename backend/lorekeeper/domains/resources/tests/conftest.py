"""Shared helpers for resource service tests."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4

from lorekeeper.api.context import ApiContext
from lorekeeper.core.access_control import Caller
from lorekeeper.core.config import Settings
from lorekeeper.core.logging import logger
from lorekeeper.core.shared_models import AuthMethod, UserRole, Visibility

OWNER_ID = UUID("00000000-0000-0000-0000-00000000000a")
OTHER_ID = UUID("00000000-0000-0000-0000-00000000000b")
ADMIN_ID = UUID("00000000-0000-0000-0000-00000000000c")
MODERATOR_ID = UUID("00000000-0000-0000-0000-00000000000d")

OWNER = Caller(id=OWNER_ID, role=UserRole.USER)
OTHER = Caller(id=OTHER_ID, role=UserRole.USER)
ADMIN = Caller(id=ADMIN_ID, role=UserRole.ADMIN)
MODERATOR = Caller(id=MODERATOR_ID, role=UserRole.MODERATOR)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _ctx(caller: Optional[Caller] = None) -> ApiContext:
    """Build a minimal ApiContext for tests; ``None`` is an anonymous request."""
    return ApiContext(
        caller=caller,
        request_id="test-req",
        auth_method=AuthMethod.TOKEN if caller else AuthMethod.ANONYMOUS,
        logger=logger.with_context(request_id="test-req"),
    )


def _settings(**overrides) -> Settings:
    return Settings(**overrides)


def _row(model, *, owner_id: Optional[UUID] = OWNER_ID, visibility=Visibility.PUBLIC, **fields):
    """Unsaved ORM row with ownership columns filled in."""
    fields.setdefault("id", uuid4())
    return model(owner_id=owner_id, visibility=visibility.value, **fields)


def _at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)
