from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.workspace_cache import InMemoryWorkspaceCache
from src.api.error import ClientError, ServerError
from src.api.utils.jwt import verify_jwt
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures
from src.app.services.workspace_cache import IWorkspaceCache
from src.app.use_cases.auth import LoadContextUseCase
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

TENANCY_WARN_HEADER = "X-Tenancy-Warn"

workspace_cache = InMemoryWorkspaceCache(
    ttl_seconds=ApplicationConfig.WORKSPACE_CACHE_TTL_SECONDS
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_tenancy_guard() -> TenancyGuard:
    """Built per request so mode changes apply without restart."""
    return TenancyGuard.from_config(ApplicationConfig)


def get_privacy_features() -> PrivacyFeatures:
    return PrivacyFeatures.from_config(ApplicationConfig)


def get_workspace_cache() -> IWorkspaceCache:
    return workspace_cache


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id and session_id

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    token = credentials.credentials
    payload = verify_jwt(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload


async def get_request_context(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RequestContext:
    """
    Resolve real user, acting user and effective tenant from the session.

    Raises:
        ClientError: 401 for an unknown, revoked or expired session,
            403 for a disabled user or inactive tenant
    """
    try:
        user_id = UUID(current_user["user_id"])
        session_id = UUID(current_user["session_id"])
    except (KeyError, ValueError):
        raise ClientError(
            Error("INVALID_TOKEN", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    result = await LoadContextUseCase(uow).execute(user_id, session_id)

    if result.is_err():
        error = result.error
        if error.code in ("SESSION_INVALID", "SESSION_REVOKED", "SESSION_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        if error.code in ("USER_DISABLED", "TENANT_SUSPENDED"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


async def require_super_user(
    context: RequestContext = Depends(get_request_context),
) -> RequestContext:
    """The real actor, not the impersonated identity, must be a super user."""
    if not context.is_real_super_user:
        raise ClientError(
            Error("SUPER_USER_REQUIRED", "Super user access required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return context


async def _json_body(request: Request) -> Optional[dict]:
    body = await request.body()
    if not body:
        return None
    try:
        data = await request.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def add_tenancy_warning_header(response: Response, message: str) -> None:
    existing = response.headers.get(TENANCY_WARN_HEADER)
    response.headers[TENANCY_WARN_HEADER] = f"{existing}; {message}" if existing else message


async def reject_client_tenant_id(
    request: Request,
    response: Response,
    guard: TenancyGuard = Depends(get_tenancy_guard),
) -> None:
    """Tenant-scoped routes take the tenant from the session only."""
    warning = guard.assert_no_client_tenant_id(
        await _json_body(request),
        dict(request.query_params),
        f"{request.method} {request.url.path}",
    )
    if warning:
        add_tenancy_warning_header(response, warning)
