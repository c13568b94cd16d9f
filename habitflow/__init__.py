"""HabitFlow application factory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask

from habitflow.config import config_by_name
from habitflow.core.auth.csrf import csrf_token_for_session
from habitflow.extensions import init_extensions

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def create_app(config_name: Optional[str] = None) -> Flask:
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    app = Flask(__name__, instance_path=str(PROJECT_ROOT / "instance"))
    app.config.from_object(config_by_name.get(env_name, config_by_name["development"]))
    _resolve_sqlite_path(app)

    _configure_logging(app)
    init_extensions(app)
    _register_models()
    _register_blueprints(app)
    _register_error_handlers(app)

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    @app.get("/api/csrf")
    def csrf_token():
        return {"ok": True, "csrf_token": csrf_token_for_session()}, 200

    from habitflow.scripts.seed_categories import register_commands

    register_commands(app)
    app.logger.debug("HabitFlow app created (%s)", env_name)
    return app


def _resolve_sqlite_path(app: Flask) -> None:
    """Anchor relative sqlite files at the project root and create their folder."""
    uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    prefix = "sqlite:///"
    if not uri.startswith(prefix) or uri.endswith(":memory:"):
        return
    path = Path(uri[len(prefix):])
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    path.parent.mkdir(parents=True, exist_ok=True)
    app.config["SQLALCHEMY_DATABASE_URI"] = f"{prefix}{path}"


def _configure_logging(app: Flask) -> None:
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")))
    if not isinstance(level, int):
        level = logging.INFO
    app.logger.setLevel(level)
    package_logger = logging.getLogger("habitflow")
    package_logger.setLevel(level)
    if not package_logger.handlers and not app.testing:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        package_logger.addHandler(handler)


def _register_models() -> None:
    """Import every model module so the metadata is complete."""
    from habitflow.core.users import models as user_models  # noqa: F401
    from habitflow.domains.categories.models import category_models  # noqa: F401
    from habitflow.domains.habits.models import habit_models  # noqa: F401
    from habitflow.platform.outbox import models as outbox_models  # noqa: F401


def _register_blueprints(app: Flask) -> None:
    from habitflow.core.auth.controllers import auth_bp
    from habitflow.domains.analytics.controllers.analytics_api import analytics_api_bp
    from habitflow.domains.categories.controllers.category_api import category_api_bp
    from habitflow.domains.habits.controllers.habit_api import habit_api_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(category_api_bp, url_prefix="/api/categories")
    app.register_blueprint(habit_api_bp, url_prefix="/api/habits")
    app.register_blueprint(analytics_api_bp, url_prefix="/api/analytics")


def _register_error_handlers(app: Flask) -> None:
    from werkzeug.exceptions import HTTPException

    from habitflow.domains.habits.errors import ERROR_STATUS, HabitError

    @app.errorhandler(HabitError)
    def _habit_error(exc: HabitError):
        return {"ok": False, "error": exc.code}, ERROR_STATUS.get(exc.code, 400)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _unexpected_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        return {"ok": False, "error": "unexpected_error"}, 500
