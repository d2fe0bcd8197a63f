"""
Workspace Entity

Organizational grouping within a tenant. Not a visibility boundary.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Workspace(SQLModel, table=True):
    __tablename__ = "workspaces"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    name: str = Field(max_length=255)

    # One primary per tenant is expected; zero or many are tolerated on read
    is_primary: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_workspace_tenant_primary", "tenant_id", "is_primary"),)
