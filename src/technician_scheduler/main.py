from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .assignments.controller import register as register_assignments
from .container import Container, build_container, build_memory_container
from .common.clock import BusinessClock
from .database.bootstrap import SCHEMA_PATH, SEED_PATH, apply_schema, apply_seed_sql, list_tables
from .days.controller import register as register_days
from .projects.controller import register as register_projects
from .reports.controller import register as register_reports
from .technicians.controller import register as register_technicians

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> Flask:
    """Application factory.

    ``container`` is for tests; otherwise one is built from the settings module
    picked by ``APP_ENV``.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        container = _container_from_settings(settings, settings_module)

    register_technicians(app, container)
    register_projects(app, container)
    register_assignments(app, container)
    register_days(app, container)
    register_reports(app, container)

    app.extensions["technician_scheduler"] = container
    return app


def _container_from_settings(settings, settings_module: str) -> Container:
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    timezone = getattr(settings, "TIMEZONE", "Asia/Jakarta")
    cutoff_minutes = int(getattr(settings, "DAY_CUTOFF_MINUTES", 5))

    if backend == "memory":
        logger.info("Starting settings=%s backend=memory", settings_module)
        return build_memory_container(clock=BusinessClock(timezone=timezone, cutoff_minutes=cutoff_minutes))

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "Starting settings=%s backend=mysql db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=SEED_PATH)
        logger.info("Demo seed ready")

    return build_container(db_config=db_config, timezone=timezone, cutoff_minutes=cutoff_minutes)
