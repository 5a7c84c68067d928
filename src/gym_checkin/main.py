from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .checkins.controller import register as register_checkins
from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import REMEMBER_ME_DAYS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .database.connection import DBConfig
from .gyms.controller import register as register_gyms
from .users.controller import register as register_users

logger = logging.getLogger("gym_checkin")

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.permanent_session_lifetime = timedelta(days=REMEMBER_ME_DAYS)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["LEGACY_CHECKIN_ENABLED"] = bool(getattr(settings, "LEGACY_CHECKIN_ENABLED", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_mapping(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(db_config=db_config)

    if app.config["LEGACY_CHECKIN_ENABLED"]:
        logger.warning("legacy in-memory check-in endpoint is enabled; its state is not durable")

    register_error_handlers(app)
    register_users(app, container)
    register_checkins(app, container)
    register_gyms(app, container)
    register_analytics(app, container)

    return app
