from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .classes.controller import register as register_classes
from .common.http import domain_error_response
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import DomainError
from .core.logging import configure_logging
from .database.bootstrap import apply_schema, list_tables
from .reminders.controller import register as register_reminders
from .subjects.controller import register as register_subjects
from .timetables.controller import register as register_timetables
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    backend = getattr(settings, "PERSISTENCE_BACKEND", "mysql")
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info("settings=%s backend=%s", settings_module, backend)

    if container is None:
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            backend=backend,
            db_config=db_config,
            reminder_interval_seconds=getattr(settings, "REMINDER_INTERVAL_SECONDS", 60),
            default_horizon_months=getattr(settings, "DEFAULT_HORIZON_MONTHS", 3),
        )
        # Reminder timers must not outlive the process' sessions; a passed-in
        # container is closed by whoever built it.
        atexit.register(container.sessions.close_all)

    app.register_error_handler(DomainError, domain_error_response)
    register_users(app, container)
    register_subjects(app, container)
    register_timetables(app, container)
    register_classes(app, container)
    register_reminders(app, container)

    app.extensions["class_schedule"] = container
    return app
