"""timecard package.

Attendance punch recording with a JSON/MySQL-backed record store,
statistics and Excel export, behind a thin Flask controller layer.
"""
from __future__ import annotations

import logging

from dotenv import load_dotenv
from flask import Flask

from .container import Container, build_container
from .records.controller import register as register_attendance
from .settings import get_settings_module, load_settings

logger = logging.getLogger(__name__)


def create_app(settings: dict | None = None, *, container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = None
    if settings is None:
        settings_module = get_settings_module()
        settings = load_settings(settings_module)

    app.secret_key = settings.get("SECRET_KEY")
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s backend=%s",
        settings_module or "<explicit>",
        settings.get("STORAGE_BACKEND", "json"),
    )

    container = container or build_container(settings)
    app.extensions["timecard"] = container

    register_attendance(app, container)

    return app
