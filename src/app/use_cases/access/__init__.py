"""
Access Grant Use Cases

The same use cases serve task and project grants, selected by ResourceType.
"""

from .change_access_role_use_case import ChangeAccessRoleUseCase
from .dtos import GrantListResponse, GrantResponse
from .grant_access_use_case import GrantAccessUseCase
from .list_access_use_case import ListAccessUseCase
from .revoke_access_use_case import RevokeAccessUseCase

__all__ = [
    "ChangeAccessRoleUseCase",
    "GrantAccessUseCase",
    "ListAccessUseCase",
    "RevokeAccessUseCase",
    "GrantListResponse",
    "GrantResponse",
]
