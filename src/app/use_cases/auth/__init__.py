from .dtos import LoginResponse, LogoutResponse, UserInfo
from .load_context_use_case import LoadContextUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase

__all__ = [
    "LoginResponse",
    "LogoutResponse",
    "UserInfo",
    "LoadContextUseCase",
    "LoginUseCase",
    "LogoutUseCase",
]
