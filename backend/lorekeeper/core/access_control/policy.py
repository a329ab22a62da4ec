"""Access decision engine.

Rules:
    view:   PUBLIC and HIDDEN are always viewable; PRIVATE only by the owner
            or a privileged caller.
    modify: privileged callers, or the authenticated owner.
    create: any authenticated caller for themselves; privileged callers may
            assign another owner.
    mask:   HIDDEN resources seen by someone who is neither owner nor
            privileged get their display fields replaced by ``HIDDEN_SENTINEL``.

None of these functions raise.
"""

from typing import Any, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel

from lorekeeper.core.access_control.caller import Caller, Ownable, is_owner, is_privileged
from lorekeeper.core.shared_models import UserRole, Visibility

HIDDEN_SENTINEL = "[HIDDEN]"

# Display fields replaced on masked resources, at any nesting depth.
MASKABLE_FIELDS = frozenset({"name", "description", "bio", "title"})

ModelT = TypeVar("ModelT", bound=BaseModel)


def can_view(caller: Optional[Caller], resource: Ownable) -> bool:
    """Whether the caller may learn that the resource exists."""
    if resource.visibility != Visibility.PRIVATE:
        return True
    return is_privileged(caller) or is_owner(caller, resource.owner_id)


def can_modify(caller: Optional[Caller], resource: Ownable) -> bool:
    """Whether the caller may update or delete the resource."""
    if caller is None:
        return False
    return caller.is_privileged or is_owner(caller, resource.owner_id)


def can_create(caller: Optional[Caller], target_owner_id: Optional[UUID] = None) -> bool:
    """Whether the caller may create a resource owned by ``target_owner_id``.

    ``None`` means "owned by the caller".
    """
    if caller is None:
        return False
    if target_owner_id is None or target_owner_id == caller.id:
        return True
    return caller.is_privileged


def needs_mask(caller: Optional[Caller], resource: Ownable) -> bool:
    """Whether ``mask`` would alter the resource for this caller."""
    if resource.visibility != Visibility.HIDDEN:
        return False
    return not (is_privileged(caller) or is_owner(caller, resource.owner_id))


def redact(model: ModelT) -> ModelT:
    """Replace every maskable string or null field, recursing into embedded models."""
    update: dict[str, Any] = {}
    for field_name in type(model).model_fields:
        value = getattr(model, field_name)
        if field_name in MASKABLE_FIELDS and (value is None or isinstance(value, str)):
            update[field_name] = HIDDEN_SENTINEL
        elif isinstance(value, BaseModel):
            update[field_name] = redact(value)
        elif isinstance(value, list) and any(isinstance(v, BaseModel) for v in value):
            update[field_name] = [redact(v) if isinstance(v, BaseModel) else v for v in value]
    if not update:
        return model
    return model.model_copy(update=update)


def mask(resource: ModelT, caller: Optional[Caller]) -> ModelT:
    """Mask a retrieved resource for the caller.

    Identity function unless the resource is HIDDEN and the caller is neither
    its owner nor privileged. Ids, ownership and visibility are never masked.
    """
    if not needs_mask(caller, resource):  # type: ignore[arg-type]
        return resource
    return redact(resource)


def embed(summary: ModelT, caller: Optional[Caller]) -> ModelT:
    """Render an embedded reference to another resource.

    A reference the caller cannot view renders as a masked placeholder rather
    than disappearing, so an empty slot or link stays distinguishable from a
    concealed one.
    """
    if not can_view(caller, summary):  # type: ignore[arg-type]
        return redact(summary)
    return mask(summary, caller)


def can_manage_user(
    caller: Optional[Caller], target_id: UUID, target_role: UserRole
) -> bool:
    """Whether the caller may change another user's role or ban state.

    Nobody manages themselves. ADMIN manages every non-ADMIN; MODERATOR
    manages plain users only.
    """
    if caller is None or caller.id == target_id:
        return False
    if caller.role == UserRole.ADMIN:
        return target_role != UserRole.ADMIN
    if caller.role == UserRole.MODERATOR:
        return target_role == UserRole.USER
    return False


def can_view_account(caller: Optional[Caller], target_id: UUID, target_role: UserRole) -> bool:
    """Whether the caller sees the full projection of a user account.

    In-memory twin of ``build_user_security_filter``.
    """
    if caller is None:
        return False
    if caller.id == target_id or caller.role == UserRole.ADMIN:
        return True
    return caller.role == UserRole.MODERATOR and target_role == UserRole.USER
