import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _setting(key: str, default):
    """Environment variable wins over env.yaml, env.yaml over the default."""
    return os.environ.get(key, data.get(key, default))


def _flag(key: str, default: bool) -> bool:
    value = _setting(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    MIGRATION_DB_URI = data.get("MIGRATION_DB_URI", "sqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    SESSION_TTL_HOURS = int(data.get("SESSION_TTL_HOURS", 24))

    # Tenancy (read again on every call of the helpers below)
    APP_ENV = _setting("APP_ENV", "development")
    TENANCY_GUARD_MODE = _setting("TENANCY_GUARD_MODE", "warn")
    TENANCY_ENFORCEMENT = _setting("TENANCY_ENFORCEMENT", "off")
    ENABLE_PRIVATE_TASKS = _flag("ENABLE_PRIVATE_TASKS", True)
    ENABLE_PRIVATE_PROJECTS = _flag("ENABLE_PRIVATE_PROJECTS", True)
    WORKSPACE_CACHE_TTL_SECONDS = int(_setting("WORKSPACE_CACHE_TTL_SECONDS", 60))

    @classmethod
    def guard_mode(cls) -> str:
        return _setting("TENANCY_GUARD_MODE", cls.TENANCY_GUARD_MODE).lower()

    @classmethod
    def enforcement_mode(cls) -> str:
        return _setting("TENANCY_ENFORCEMENT", cls.TENANCY_ENFORCEMENT).lower()

    @classmethod
    def environment(cls) -> str:
        return _setting("APP_ENV", cls.APP_ENV).lower()
