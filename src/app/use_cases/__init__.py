"""
Use Cases

Organized into domain folders:
- auth/: login, logout, request context
- projects/, tasks/: tenant-scoped resources
- access/: task and project access grants
- impersonation/: super-user impersonation
- admin/: super-admin provisioning
- audit/: audit trail
"""
