from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(user_id: UUID, session_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """
    Generate JWT access token bound to a server-side session

    Args:
        user_id: User UUID
        session_id: Session UUID; the session row carries revocation and
            impersonation state
        expires_delta: Token lifetime, defaults to SESSION_TTL_HOURS

    Returns:
        JWT token string (HS256)
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=ApplicationConfig.SESSION_TTL_HOURS)
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "session_id": str(session_id),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
    except JWTError:
        return None

    if "user_id" not in payload or "session_id" not in payload:
        return None
    return payload
