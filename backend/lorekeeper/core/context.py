"""Base context for all operations.

Services and repositories type-hint against ``ApiContext`` (which extends
this) and read the caller's identity from it.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
from uuid import UUID

from lorekeeper.core.access_control import Caller
from lorekeeper.core.logging import ContextualLogger


@dataclass
class BaseContext:
    """Base context for all operations.

    Carries the caller identity (``None`` for anonymous requests) and a
    contextual logger. ``logger`` is keyword-only; when omitted it is
    derived from the caller in __post_init__.
    """

    caller: Optional[Caller] = None

    logger: ContextualLogger = field(default=None, kw_only=True, repr=False)

    def __post_init__(self):
        """Auto-derive logger from the caller identity if not provided."""
        if self.logger is None:
            from lorekeeper.core.logging import logger as base_logger

            caller_id = str(self.caller.id) if self.caller else "anonymous"
            dims: Dict[str, str] = {"caller_id": caller_id}
            if self.caller:
                dims["caller_role"] = self.caller.role.value
            self.logger = base_logger.with_context(**dims)

    @property
    def is_anonymous(self) -> bool:
        """Whether the request carries no identity."""
        return self.caller is None

    @property
    def is_privileged(self) -> bool:
        """Whether the caller is ADMIN or MODERATOR."""
        return self.caller is not None and self.caller.is_privileged

    @property
    def user_id(self) -> Optional[UUID]:
        """Caller id if authenticated."""
        return self.caller.id if self.caller else None
