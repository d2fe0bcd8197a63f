"""
AuditEvent Entity

Append-only log of privileged and cross-tenant actions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - tenant audit trail.

    Business Rules:
    - Immutable (never updated or deleted by normal operation)
    - actor_user_id is the acting user; impersonation events name the real super user
    - Written for impersonation, provisioning and access grant changes
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: Optional[UUID] = Field(default=None, index=True)
    actor_user_id: Optional[UUID] = Field(default=None, index=True)

    event_type: str = Field(max_length=100)  # e.g., "impersonation_started"
    message: str = Field(default="", max_length=1000)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_tenant_type", "tenant_id", "event_type"),
    )
