from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .common.logging_config import configure_logging
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_catalog, ensure_demo_members, list_tables

from .container import build_container
from .absence_requests.controller import register as register_absence_requests
from .attendance.controller import register as register_attendance
from .events.controller import register as register_events
from .gig_requests.controller import register as register_gig_requests
from .members.controller import register as register_members
from .permissions.controller import register as register_permissions
from .todos.controller import register as register_todos

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    database_dir = Path(__file__).resolve().parents[3] / "database"
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=database_dir / "schema.sql")
        ensure_catalog(db_config)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=database_dir / "seed.sql")
        ensure_demo_members(db_config)
        logger.info("demo seed ready")

    container = build_container(db_config=db_config, cache_catalog=bool(getattr(settings, "CATALOG_CACHE", True)))

    register_error_handlers(app)
    register_members(app, container)
    register_permissions(app, container)
    register_events(app, container)
    register_attendance(app, container)
    register_absence_requests(app, container)
    register_gig_requests(app, container)
    register_todos(app, container)

    return app
