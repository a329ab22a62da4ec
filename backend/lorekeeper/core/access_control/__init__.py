"""Access decisions, output masking and storage-level security filters.

The policy functions are pure: they take a caller and a minimal resource
descriptor (anything with ``owner_id`` and ``visibility``) and return
booleans. Translating a ``False`` into NOT_FOUND or FORBIDDEN is the
service layer's job.
"""

from lorekeeper.core.access_control.caller import Caller, Ownable, is_owner, is_privileged
from lorekeeper.core.access_control.filters import (
    build_security_filter,
    build_user_security_filter,
)
from lorekeeper.core.access_control.policy import (
    HIDDEN_SENTINEL,
    MASKABLE_FIELDS,
    can_create,
    can_manage_user,
    can_modify,
    can_view,
    can_view_account,
    embed,
    mask,
    needs_mask,
    redact,
)

__all__ = [
    "Caller",
    "Ownable",
    "HIDDEN_SENTINEL",
    "MASKABLE_FIELDS",
    "build_security_filter",
    "build_user_security_filter",
    "can_create",
    "can_manage_user",
    "can_modify",
    "can_view",
    "can_view_account",
    "embed",
    "is_owner",
    "is_privileged",
    "mask",
    "needs_mask",
    "redact",
]
