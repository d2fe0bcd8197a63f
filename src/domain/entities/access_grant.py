"""
Access Grant Entities

Explicit grants binding a user to a task or project with a role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import AccessRole


class TaskAccess(SQLModel, table=True):
    """
    TaskAccess entity - one explicit grant on a task.

    Business Rules:
    - (task_id, user_id) is unique; enforced by the database
    - Role changes replace the role, they never stack
    - Grantee must belong to the task's tenant
    """

    __tablename__ = "task_access"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    task_id: UUID = Field(foreign_key="tasks.id", nullable=False)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    role: AccessRole = Field(default=AccessRole.editor)
    invited_by_user_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_task_access_task_user", "task_id", "user_id", unique=True),
        Index("idx_task_access_tenant_user", "tenant_id", "user_id"),
    )

    @property
    def resource_id(self) -> UUID:
        return self.task_id


class ProjectAccess(SQLModel, table=True):
    """
    ProjectAccess entity - one explicit grant on a project.

    Same rules as TaskAccess. A project grant also exposes the project's
    private tasks to the grantee.
    """

    __tablename__ = "project_access"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    project_id: UUID = Field(foreign_key="projects.id", nullable=False)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    role: AccessRole = Field(default=AccessRole.editor)
    invited_by_user_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_project_access_project_user", "project_id", "user_id", unique=True),
        Index("idx_project_access_tenant_user", "tenant_id", "user_id"),
    )

    @property
    def resource_id(self) -> UUID:
        return self.project_id
