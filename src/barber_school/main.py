from __future__ import annotations

import importlib
import logging
import logging.config
from datetime import timedelta
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.http import fail
from .container import build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .core.exceptions import DomainError, StorageFailure
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables

from .attendance.controller import register as register_attendance
from .courses.controller import register as register_courses
from .enrollments.controller import register as register_enrollments
from .instructors.controller import register as register_instructors
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_SETTING_NAMES = (
    "SECRET_KEY",
    "DB_CONFIG",
    "DEBUG",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "SESSION_DAYS",
    "ADMIN_USERNAME",
    "ADMIN_PASSWORD",
    "LOGGING",
    "CLOCK",
)


def _load_settings(overrides: Optional[dict[str, Any]]) -> dict[str, Any]:
    module_name = get_settings_module()
    settings = importlib.import_module(module_name)
    values = {name: getattr(settings, name, None) for name in _SETTING_NAMES}
    values["MODULE"] = module_name
    values.update(overrides or {})
    return values


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(StorageFailure)
    def handle_storage_failure(e: StorageFailure):
        logger.exception("Storage failure")
        return fail(str(e) or "Storage error", e.status_code)

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return fail("Internal server error", 500)


def create_app(overrides: Optional[dict[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(overrides)

    if settings["LOGGING"]:
        logging.config.dictConfig(settings["LOGGING"])

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings["DEBUG"])
    app.permanent_session_lifetime = timedelta(days=int(settings["SESSION_DAYS"] or DEFAULT_SESSION_DAYS))

    db_config = dict(settings["DB_CONFIG"])
    logger.info("Starting barber-school settings=%s db=%s", settings["MODULE"], db_config.get("path"))

    if settings["AUTO_INIT_DB"]:
        apply_schema(db_config)
        logger.debug("Schema ready (tables=%s)", len(list_tables(db_config)))
    if settings["AUTO_SEED_DB"] and settings["ADMIN_USERNAME"] and settings["ADMIN_PASSWORD"]:
        ensure_admin_user(
            db_config,
            username=settings["ADMIN_USERNAME"],
            password=settings["ADMIN_PASSWORD"],
        )

    container = build_container(db_config=db_config, clock=settings["CLOCK"])
    app.extensions["barber_school"] = container

    register_users(app, container)
    register_courses(app, container)
    register_students(app, container)
    register_instructors(app, container)
    register_enrollments(app, container)
    register_attendance(app, container)
    _register_error_handlers(app)

    return app
