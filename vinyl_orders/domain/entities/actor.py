"""Acting user as seen by the order engine."""
from dataclasses import dataclass, field
from typing import Optional

from ..enums import UserRole


@dataclass(frozen=True)
class WorkerPermissions:
    """Permission flags a master grants to a worker."""
    can_manage_orders: bool = False


@dataclass(frozen=True)
class Actor:
    """
    Authenticated user performing an operation.

    Identity is established upstream; the engine only consumes the
    role, permission flags and distributor scope.
    """
    user_id: str
    role: UserRole
    distributor_id: Optional[str] = None
    permissions: WorkerPermissions = field(default_factory=WorkerPermissions)

    def __post_init__(self):
        object.__setattr__(self, "role", UserRole(self.role))
