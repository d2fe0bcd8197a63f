"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
"""

from typing import Optional
from pydantic import BaseModel


class UserInfo(BaseModel):
    """User information in authentication responses"""

    id: str
    email: str
    name: Optional[str]
    role: str
    tenant_id: Optional[str]


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    token_type: str = "bearer"
    session_id: str
    expires_at: str
    user: UserInfo


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    status: str
