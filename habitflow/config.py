"""Environment-driven configuration classes, picked by ``APP_ENV``."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Dict, Type

from dotenv import load_dotenv
from sqlalchemy.engine.url import make_url

load_dotenv()


def env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, default))


def engine_options(uri: str) -> dict:
    """Pool/connect options for the configured database backend."""
    url = make_url(uri)
    backend = url.get_backend_name()
    options: dict = {"pool_pre_ping": True}
    if backend == "sqlite" and url.database not in (None, "", ":memory:"):
        # wait on the writer lock instead of failing with "database is locked"
        options["connect_args"] = {"timeout": 30}
    elif backend in ("postgresql", "postgres"):
        options["connect_args"] = {"connect_timeout": env_int("DB_CONNECT_TIMEOUT_SECONDS", 10)}
    return options


class BaseConfig:
    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///instance/habitflow.db")
    SQLALCHEMY_ENGINE_OPTIONS = engine_options(SQLALCHEMY_DATABASE_URI)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = env_flag("SESSION_COOKIE_SECURE", False)
    WTF_CSRF_ENABLED = env_flag("CSRF_ENABLED", True)

    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=env_int("JWT_ACCESS_MINUTES", 30))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=env_int("JWT_REFRESH_DAYS", 14))
    AUTO_LOGIN_ON_REGISTER = env_flag("AUTO_LOGIN_ON_REGISTER", True)

    RATELIMIT_ENABLED = env_flag("RATELIMIT_ENABLED", True)
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "200/hour")
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")

    # /api/analytics/progress window when the request has no ?period=
    HABITS_PROGRESS_DEFAULT_PERIOD = env_int("HABITS_PROGRESS_DEFAULT_PERIOD", 30)


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ENGINE_OPTIONS = engine_options(SQLALCHEMY_DATABASE_URI)
    JWT_SECRET_KEY = "testing-jwt-secret-key-with-enough-length"
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    AUTO_LOGIN_ON_REGISTER = True


class ProductionConfig(BaseConfig):
    SESSION_COOKIE_SECURE = True
    AUTO_LOGIN_ON_REGISTER = env_flag("AUTO_LOGIN_ON_REGISTER", False)


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "ci": TestingConfig,
    "production": ProductionConfig,
}
