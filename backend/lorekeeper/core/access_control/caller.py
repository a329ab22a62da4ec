"""Caller identity and the minimal resource descriptor used by access decisions."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID

from lorekeeper.core.shared_models import PRIVILEGED_ROLES, UserRole, Visibility


@dataclass(frozen=True)
class Caller:
    """Authenticated identity of a request. Anonymous requests carry ``None`` instead."""

    id: UUID
    role: UserRole = UserRole.USER

    @property
    def is_privileged(self) -> bool:
        """ADMIN and MODERATOR bypass ownership and masking checks."""
        return self.role in PRIVILEGED_ROLES


class Ownable(Protocol):
    """Anything carrying an owner and a visibility.

    ORM rows, read schemas and embedded summaries all satisfy it, so callers
    never have to load a full entity to ask whether they may see it.
    """

    owner_id: Optional[UUID]
    visibility: Visibility


def is_privileged(caller: Optional[Caller]) -> bool:
    """Whether the caller is ADMIN or MODERATOR."""
    return caller is not None and caller.is_privileged


def is_owner(caller: Optional[Caller], owner_id: Optional[UUID]) -> bool:
    """Whether the caller owns a resource. System-owned resources have no owner."""
    return caller is not None and owner_id is not None and caller.id == owner_id
