"""
Login Use Case

Authenticates a user and opens a server-side session.
"""

import bcrypt
from datetime import datetime, timedelta
from typing import Optional

from config import ApplicationConfig
from src.api.utils.jwt import generate_jwt
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Session
from src.libs.result import Error, Result, Return
from .dtos import LoginResponse, UserInfo


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - User must be active
    - Users of a suspended or deleted tenant cannot log in; super users
      have no tenant and are never blocked by tenant status
    - Creates a new session; the JWT only references it
    - Updates user.last_login_at
    """

    def __init__(self, uow: UnitOfWork, session_ttl_hours: Optional[int] = None):
        self.uow = uow
        self.session_ttl = timedelta(
            hours=session_ttl_hours or ApplicationConfig.SESSION_TTL_HOURS
        )

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing the token and user info, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email.lower())

            # Always perform a hash check even if user not found
            if user is None or not user.password_hash:
                bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(12))
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not user.is_active:
                return Return.err(Error("USER_DISABLED", "User account is disabled"))

            if user.tenant_id is not None:
                tenant = await self.uow.tenants.get_by_id(user.tenant_id)
                if tenant is None or not tenant.is_operational:
                    return Return.err(
                        Error("TENANT_SUSPENDED", "Tenant is not active")
                    )

            now = datetime.utcnow()
            session = Session(user_id=user.id, expires_at=now + self.session_ttl)
            await self.uow.sessions.create(session)

            user.last_login_at = now
            await self.uow.users.update(user)

            await self.uow.commit()

            access_token = generate_jwt(user.id, session.id, self.session_ttl)

            return Return.ok(
                LoginResponse(
                    access_token=access_token,
                    session_id=str(session.id),
                    expires_at=session.expires_at.isoformat() + "Z",
                    user=UserInfo(
                        id=str(user.id),
                        email=user.email,
                        name=user.name,
                        role=user.role.value,
                        tenant_id=str(user.tenant_id) if user.tenant_id else None,
                    ),
                )
            )
