"""
Environment-aware configuration.
Values are read from the process environment (and .env, if present) once, when
this module is imported. The database URL is handled by DBStorage.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present


def _optional_int(name: str):
    value = os.getenv(name)
    return int(value) if value else None


class BaseConfig:
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    # Only "dev" enables the destructive /admin/reset endpoint
    PLATFORM = os.getenv("PLATFORM", "")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    # Auth
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
    POLKA_KEY = os.getenv("POLKA_KEY", "")
    ACCESS_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("ACCESS_TOKEN_EXPIRES_SECONDS", "3600")))
    REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "60")))
    PASSWORD_HASH_TIME_COST = _optional_int("PASSWORD_HASH_TIME_COST")
    PASSWORD_HASH_MEMORY_COST = _optional_int("PASSWORD_HASH_MEMORY_COST")
    # Directory served under /app/
    FILESERVER_ROOT = os.getenv("FILESERVER_ROOT", ".")


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    PLATFORM = "dev"
    JWT_SECRET = "test-jwt-secret"
    POLKA_KEY = "test-polka-key"
    # Cheap hashes keep the suite fast
    PASSWORD_HASH_TIME_COST = 1
    PASSWORD_HASH_MEMORY_COST = 1024


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/test).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
