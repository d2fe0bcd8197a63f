"""
Audit Recording

Audit events describe an action that has already been committed. A failed
audit write is logged and dropped; it never fails the action it describes.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


async def record_tenant_audit_event(
    uow: UnitOfWork,
    tenant_id: Optional[UUID],
    event_type: str,
    message: str,
    actor_user_id: Optional[UUID],
    metadata: Optional[Dict[str, Any]] = None,
) -> Optional[AuditEvent]:
    """Write and commit one audit event. Returns None when the write failed."""
    try:
        event = await uow.audit_events.create(
            AuditEvent(
                tenant_id=tenant_id,
                actor_user_id=actor_user_id,
                event_type=event_type,
                message=message,
                event_metadata=metadata or {},
            )
        )
        await uow.commit()
        return event
    except Exception as exc:
        logger.error(f"Failed to record audit event {event_type} for tenant {tenant_id}: {exc}")
        try:
            await uow.rollback()
        except Exception as rollback_exc:
            logger.error(f"Rollback after audit failure also failed: {rollback_exc}")
        return None
