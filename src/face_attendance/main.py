from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import build_container
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables

from .attendance.controller import register as register_attendance
from .geo.controller import register as register_geo
from .leaves.controller import register as register_leaves
from .settings.controller import register as register_settings
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    admin_password = getattr(settings, "ADMIN_PASSWORD", "")
    if getattr(settings, "AUTO_SEED_DB", False):
        if admin_password:
            ensure_admin_user(db_config, email=settings.ADMIN_EMAIL, password=admin_password)
        else:
            logger.warning("AUTO_SEED_DB is set but ADMIN_PASSWORD is empty; skipping admin seed")

    container = build_container(db_config=db_config)

    register_users(app, container)
    register_geo(app, container)
    register_attendance(app, container)
    register_settings(app, container)
    register_leaves(app, container)

    return app
