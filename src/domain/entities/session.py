"""
Session Entity

Server-side HTTP session. Holds the impersonation state of its super user.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel


class Session(SQLModel, table=True):
    """
    Session entity - the session store behind issued access tokens.

    Business Rules:
    - Revoked or expired sessions reject every request
    - impersonation holds the serialized impersonation state; None means idle
    - Impersonation state never outlives its session
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    impersonation: Optional[dict] = Field(
        default=None, sa_column=Column(JSON(none_as_null=True))
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_revoked", "revoked"),
    )

    def is_valid(self, now: datetime) -> bool:
        return not self.revoked and self.expires_at > now
