from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from src.app.services.tenancy_guard import (
    ChatMembershipRequired,
    ClientTenantIdRejected,
    CrossTenantViolation,
    TenancyGuardError,
    TenantContextMissing,
)
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)

TENANCY_ERROR_STATUS = (
    (TenantContextMissing, status.HTTP_401_UNAUTHORIZED),
    (CrossTenantViolation, status.HTTP_403_FORBIDDEN),
    (ChatMembershipRequired, status.HTTP_403_FORBIDDEN),
    (ClientTenantIdRejected, status.HTTP_400_BAD_REQUEST),
)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_tenancy_error(request: Request, exc: TenancyGuardError):
    for error_cls, status_code in TENANCY_ERROR_STATUS:
        if isinstance(exc, error_cls):
            logger.warning(f"Tenancy error on {request.method} {request.url.path}: {exc.message}")
            return JSONResponse(
                status_code=status_code,
                content={"error": {"code": exc.code, "message": exc.message}},
            )

    # Missing tenant ids and data integrity problems are server faults
    logger.error(f"Tenancy error on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": exc.code, "message": "Internal server error"}},
    )


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    app = FastAPI(title="Tenant Access Service", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import (
        access,
        audit,
        auth,
        health_check,
        impersonation,
        projects,
        super_admin,
        tasks,
        user,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])
    app.include_router(projects.router, tags=["Projects"])
    app.include_router(tasks.router, tags=["Tasks"])
    app.include_router(access.router, tags=["Access"])
    app.include_router(impersonation.router, tags=["Impersonation"])
    app.include_router(super_admin.router, tags=["Super Admin"])
    app.include_router(audit.router, tags=["Audit"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(TenancyGuardError, handle_tenancy_error)

    return app
