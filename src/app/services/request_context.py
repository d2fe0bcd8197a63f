"""
Request Context

Identity snapshot of one authenticated request. Holds plain values only, so
it stays usable after the unit of work that loaded it has closed.
"""

from dataclasses import dataclass, field
from typing import Optional, Union
from uuid import UUID

from src.domain.entities import UserRole
from src.domain.impersonation import IdleState, ImpersonatingState


@dataclass(frozen=True)
class RequestContext:
    session_id: UUID

    # The authenticated user, always; the super user while impersonating
    real_user_id: UUID
    real_user_email: str
    real_user_role: UserRole

    # Whose permissions apply: the impersonated user, or the real user
    acting_user_id: UUID
    acting_user_role: UserRole

    # Impersonated tenant while impersonating, else the user's own tenant
    tenant_id: Optional[UUID]

    impersonation: Union[IdleState, ImpersonatingState] = field(default_factory=IdleState)

    @property
    def is_impersonating(self) -> bool:
        return isinstance(self.impersonation, ImpersonatingState)

    @property
    def is_real_super_user(self) -> bool:
        return self.real_user_role == UserRole.super_user
