"""
Project Entity

Tenant-owned work container.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import Visibility


class Project(SQLModel, table=True):
    """
    Project entity.

    Business Rules:
    - tenant_id must be set on insert (nullable only to surface legacy rows)
    - A private project is readable by its creator, grantees and tenant admins
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id", index=True)
    workspace_id: Optional[UUID] = Field(default=None, foreign_key="workspaces.id")

    name: str = Field(max_length=255)
    visibility: Visibility = Field(default=Visibility.workspace)
    created_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_project_tenant_visibility", "tenant_id", "visibility"),)
