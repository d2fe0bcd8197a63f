"""
Task Entity

Tenant-owned work item, optionally inside a project.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import Visibility


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id", index=True)
    project_id: Optional[UUID] = Field(default=None, foreign_key="projects.id", index=True)

    title: str = Field(max_length=500)
    visibility: Visibility = Field(default=Visibility.workspace)
    created_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_task_tenant_visibility", "tenant_id", "visibility"),)
