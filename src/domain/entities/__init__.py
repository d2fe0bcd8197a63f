"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AccessRole,
    ResourceType,
    TenantStatus,
    UserRole,
    Visibility,
)

# Export all entities
from .tenant import Tenant
from .workspace import Workspace
from .user import User
from .project import Project
from .task import Task
from .access_grant import ProjectAccess, TaskAccess
from .session import Session
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "AccessRole",
    "ResourceType",
    "TenantStatus",
    "UserRole",
    "Visibility",
    # Entities
    "Tenant",
    "Workspace",
    "User",
    "Project",
    "Task",
    "TaskAccess",
    "ProjectAccess",
    "Session",
    "AuditEvent",
]
