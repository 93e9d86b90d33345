from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.datetime_utils import load_timezone
from .core.constants import DEFAULT_LOG_LEVEL, DEFAULT_REFERENCE_TIMEZONE
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_employees, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", DEFAULT_LOG_LEVEL))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        reference_tz = load_timezone(getattr(settings, "ATTENDANCE_TIMEZONE", DEFAULT_REFERENCE_TIMEZONE))
        logger.info(
            "settings=%s db=%s@%s:%s/%s tz=%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
            reference_tz,
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_employees(db_config)
            logger.info("Demo seed ready")

        container = build_container(db_config=db_config, reference_tz=reference_tz)

    register_employees(app, container)
    register_attendance(app, container)

    return app
