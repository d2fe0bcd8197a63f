"""
Impersonation State Machine

The impersonation state of a session is a tagged union stored as JSON on
the session row:

    {"state": "idle"}
    {"state": "impersonating", "original_super_user_id": ..., ...}

transition() is the only way to move between states.
"""

from datetime import UTC, datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


class IdleState(BaseModel):
    state: Literal["idle"] = "idle"


class ImpersonatingState(BaseModel):
    state: Literal["impersonating"] = "impersonating"

    original_super_user_id: str
    original_super_user_email: str

    # Unset for tenant-context impersonation
    impersonated_user_id: Optional[str] = None
    impersonated_user_email: Optional[str] = None
    impersonated_user_role: Optional[str] = None

    impersonated_tenant_id: str
    impersonated_tenant_name: str

    started_at: datetime

    @property
    def is_user_impersonation(self) -> bool:
        return self.impersonated_user_id is not None

    def duration_seconds(self, now: datetime) -> int:
        started = self.started_at
        if started.tzinfo is None:
            started = started.replace(tzinfo=UTC)
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return max(0, round((now - started).total_seconds()))


ImpersonationState = Annotated[
    Union[IdleState, ImpersonatingState], Field(discriminator="state")
]

_state_adapter = TypeAdapter(ImpersonationState)


class StartImpersonation(BaseModel):
    """Event: a super user starts impersonating a tenant or a tenant user."""

    original_super_user_id: str
    original_super_user_email: str
    impersonated_tenant_id: str
    impersonated_tenant_name: str
    impersonated_user_id: Optional[str] = None
    impersonated_user_email: Optional[str] = None
    impersonated_user_role: Optional[str] = None
    at: datetime


class ExitImpersonation(BaseModel):
    """Event: the impersonation ends (explicit exit, stop or expiry sweep)."""

    at: datetime


ImpersonationEvent = Union[StartImpersonation, ExitImpersonation]


class IllegalTransition(Exception):
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


def transition(
    current: Union[IdleState, ImpersonatingState], event: ImpersonationEvent
) -> Union[IdleState, ImpersonatingState]:
    """Apply an event to the current state, raising IllegalTransition if not allowed."""
    if isinstance(event, StartImpersonation):
        if isinstance(current, ImpersonatingState):
            raise IllegalTransition(
                "ALREADY_IMPERSONATING",
                "Exit the current impersonation before starting another",
            )
        return ImpersonatingState(
            original_super_user_id=event.original_super_user_id,
            original_super_user_email=event.original_super_user_email,
            impersonated_user_id=event.impersonated_user_id,
            impersonated_user_email=event.impersonated_user_email,
            impersonated_user_role=event.impersonated_user_role,
            impersonated_tenant_id=event.impersonated_tenant_id,
            impersonated_tenant_name=event.impersonated_tenant_name,
            started_at=event.at,
        )

    if isinstance(event, ExitImpersonation):
        if isinstance(current, IdleState):
            raise IllegalTransition(
                "NOT_IMPERSONATING", "Not currently impersonating"
            )
        return IdleState()

    raise TypeError(f"Unknown impersonation event: {type(event).__name__}")


def load_state(raw: Optional[dict]) -> Union[IdleState, ImpersonatingState]:
    """Deserialize the session field. Missing or empty means idle."""
    if not raw:
        return IdleState()
    return _state_adapter.validate_python(raw)


def dump_state(state: Union[IdleState, ImpersonatingState]) -> Optional[dict]:
    """Serialize for the session field. Idle is stored as None so no field lingers."""
    if isinstance(state, IdleState):
        return None
    return state.model_dump(mode="json")
