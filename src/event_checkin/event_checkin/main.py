from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .badges.controller import register as register_badges
from .checkin.controller import register as register_checkin
from .container import Container, build_container
from .core.enums import StoreBackend
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DatabaseConnection, DBConfig
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def load_settings() -> Any:
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def create_app(*, settings: Any = None, container: Optional[Container] = None) -> Flask:
    settings = settings or load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = str(getattr(settings, "STORE_BACKEND", StoreBackend.MEMORY.value)).lower()
    if backend == StoreBackend.MYSQL.value and bool(getattr(settings, "AUTO_INIT_DB", False)):
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
        apply_schema(conn, schema_path=SCHEMA_PATH)
        logger.info("Schema ready (tables=%d)", len(list_tables(conn)))

    container = container or build_container(settings=settings)
    app.extensions["event_checkin"] = container

    register_checkin(app, container)
    register_reports(app, container)
    register_badges(app, container)

    return app
