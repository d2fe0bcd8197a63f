"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.api.error import ClientError, ServerError
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import GetAuditEventsUseCase
from src.depends import get_request_context, get_tenancy_guard, get_unit_of_work

router = APIRouter(prefix="/audit", tags=["Audit"])


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    event_type: str
    message: str
    actor_user_id: Optional[str]
    actor_email: Optional[str]
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    """GET /audit/events response payload"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get(
    "/events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_audit_events(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Tenant Audit Events

    Returns the audit trail of the effective tenant. Super users reach a
    tenant's trail by impersonating it.

    Query Parameters:
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page

    Returns:
        - events: List of audit events ordered by newest first
        - next_cursor: Cursor for next page (null if no more events)

    Raises:
        - 401 Unauthorized: Invalid token or no tenant context
        - 403 Forbidden: Insufficient role (must be tenant admin or super user)
        - 500 Internal Server Error: Server error
    """
    use_case = GetAuditEventsUseCase(uow, guard)
    result = await use_case.execute(context, limit=limit, cursor=cursor)

    if result.is_err():
        error = result.error
        if error.code == "INSUFFICIENT_ROLE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
