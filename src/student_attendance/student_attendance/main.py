from __future__ import annotations

import importlib
import logging
import sys
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import ConfigurationError
from .core.settings import AppSettings, load_settings
from .database.bootstrap import apply_schema, list_tables
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def load_app_settings() -> AppSettings:
    load_dotenv(override=False)
    settings_module = get_settings_module()
    return load_settings(importlib.import_module(settings_module))


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Optional[AppSettings] = None, container: Optional[Container] = None) -> Flask:
    """Flask application factory.

    ``settings`` defaults to the module selected by APP_ENV; ``container`` is
    built from the settings unless one is supplied (tests pass fakes).
    """

    settings = settings or (container.settings if container else load_app_settings())
    configure_logging(settings.log_level)

    app = Flask(__name__, template_folder="../../../templates")
    app.config["DEBUG"] = settings.debug
    CORS(app, origins=settings.cors_origins)

    logger.info("Starting with %r", settings)

    if container is None:
        if settings.auto_init_db:
            apply_schema(settings.db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(settings.db_config)))
        container = build_container(settings)

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def health():
        return jsonify({"ok": True})

    register_students(app, container)
    register_attendance(app, container)

    return app


def run() -> None:
    try:
        settings = load_app_settings()
    except ConfigurationError as e:
        configure_logging("INFO")
        logger.error("%s", e)
        sys.exit(1)

    app = create_app(settings)
    logger.info("Backend running on port %d", settings.port)
    app.run(host="0.0.0.0", port=settings.port, debug=settings.debug)
