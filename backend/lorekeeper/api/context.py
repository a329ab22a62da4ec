"""HTTP API request context.

Extends BaseContext with request tracking and authentication metadata.
Only the API layer creates these via deps.get_context().
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from lorekeeper.core.context import BaseContext
from lorekeeper.core.shared_models import AuthMethod


@dataclass
class ApiContext(BaseContext):
    """Full HTTP request context.

    Created by deps.get_context() and injected into endpoints via Depends().
    """

    # Request metadata
    request_id: str = ""

    # Authentication context
    auth_method: AuthMethod = AuthMethod.ANONYMOUS
    auth_metadata: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        """Compact description for logs."""
        who = f"{self.caller.id} ({self.caller.role.value})" if self.caller else "anonymous"
        return (
            f"ApiContext(request_id={self.request_id}, caller={who}, "
            f"auth={self.auth_method.value})"
        )
