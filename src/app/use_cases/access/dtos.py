"""
Access Grant Use Case DTOs
"""

from typing import List, Optional
from pydantic import BaseModel


class GrantResponse(BaseModel):
    """One explicit grant on a task or project"""

    resource_type: str
    resource_id: str
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: str
    invited_by_user_id: Optional[str] = None
    created_at: str


class GrantListResponse(BaseModel):
    grants: List[GrantResponse]
