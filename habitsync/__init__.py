"""habitsync application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from habitsync.config import config_by_name
from habitsync.core.events.event_bus import event_bus
from habitsync.extensions import db, init_extensions, jwt


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the habitsync Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(__name__, instance_path=str(instance_root), instance_relative_config=True)
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)

    _configure_logging(app)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///"):
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        abs_path = db_path if db_path.is_absolute() else project_root / db_path
        abs_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{abs_path}"

    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)

    app.extensions["event_bus"] = event_bus

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    @app.get("/api/v1/ping")
    def ping():
        """Lightweight endpoint for load-balancer health checks."""
        return {"pong": True}, 200

    from habitsync.scripts.seed_habits import register_commands

    register_commands(app)

    if app.config.get("SEED_HABITS_ON_STARTUP"):
        _seed_catalog(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = app.config.get("LOG_LEVEL", "INFO")
    if not logging.getLogger().handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger("habitsync").setLevel(level)
    app.logger.setLevel(level)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from habitsync.core.admin.controllers import admin_bp
    from habitsync.core.auth.controllers import auth_bp  # local import to avoid circulars
    from habitsync.domains.habits.controllers.habit_api import habit_api_bp
    from habitsync.domains.habits.controllers.tracking_api import tracking_api_bp
    from habitsync.domains.habits.controllers.user_habit_api import user_habit_api_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(habit_api_bp, url_prefix="/api/habits")
    app.register_blueprint(user_habit_api_bp, url_prefix="/api/user-habits")
    app.register_blueprint(tracking_api_bp, url_prefix="/api/tracking")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        code = (exc.name or "error").lower().replace(" ", "_")
        return {"ok": False, "error": code, "message": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        db.session.rollback()
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": "unexpected_error", "message": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500


def _register_auth_handlers(app: Flask) -> None:
    """JWT failures use the same envelope as every other error."""

    def _unauthenticated(message: str):
        return (
            jsonify({"ok": False, "error": "unauthenticated", "kind": "unauthenticated", "message": message}),
            401,
        )

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _unauthenticated("Authentication token required")

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _unauthenticated("Invalid or expired token")

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return _unauthenticated("Invalid or expired token")


def _seed_catalog(app: Flask) -> None:
    """Seed the habit catalog once the schema exists; safe to run from every worker."""
    from habitsync.domains.habits.services import seed_default_habits

    with app.app_context():
        try:
            tables = inspect(db.engine)
            if not (tables.has_table("habits_habit") and tables.has_table("core_id_counter")):
                app.logger.info("Habit catalog not seeded: schema not migrated yet")
                return
        except SQLAlchemyError:
            app.logger.warning("Habit catalog not seeded: database unavailable", exc_info=True)
            return
        result = seed_default_habits()
        if not result.ok:
            app.logger.warning("Habit catalog seeding failed: %s", result.code)
        db.session.remove()
