"""
User Entity

Identity record. Tenant users belong to exactly one tenant; super users
belong to none.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - Email must be unique across all users
    - tenant_id is null only for super users and users awaiting assignment
    - Disabled through is_active, never hard-deleted while referenced
    - Password stored as bcrypt hash
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id", index=True)

    email: str = Field(unique=True, index=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)

    role: UserRole = Field(default=UserRole.employee)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_tenant_role", "tenant_id", "role"),)

    @property
    def is_super_user(self) -> bool:
        return self.role == UserRole.super_user

    def is_tenant_admin_of(self, tenant_id: UUID) -> bool:
        """Super users administer every tenant; admins only their own."""
        if self.role == UserRole.super_user:
            return True
        return self.role == UserRole.admin and self.tenant_id == tenant_id
