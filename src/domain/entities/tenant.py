"""
Tenant Entity

Top-level isolation boundary.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - the unit of data partitioning.

    Business Rules:
    - Owns all workspaces, users, projects and tasks
    - Suspended and deleted tenants cannot be impersonated
    - Suspension revokes the sessions of the tenant's users
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    status: TenantStatus = Field(default=TenantStatus.active)

    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_tenant_status", "status"),)

    @property
    def is_operational(self) -> bool:
        return self.status == TenantStatus.active
