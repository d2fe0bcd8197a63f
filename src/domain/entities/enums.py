"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant status"""

    active = "active"
    suspended = "suspended"
    deleted = "deleted"


class UserRole(str, Enum):
    """User role. super_user is platform-wide; the others are tenant roles."""

    super_user = "super_user"
    admin = "admin"
    employee = "employee"
    client = "client"


class Visibility(str, Enum):
    """Visibility of a project or task"""

    workspace = "workspace"
    private = "private"


class AccessRole(str, Enum):
    """Role held by an explicit access grant"""

    viewer = "viewer"
    editor = "editor"
    admin = "admin"


class ResourceType(str, Enum):
    """Resources that carry access grants"""

    task = "task"
    project = "project"
