from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .progress.controller import register as register_progress
from .staff.controller import register as register_staff
from .store.controller import register as register_store
from .supplies.controller import register as register_supplies
from .tasks.controller import register as register_tasks

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            billing_url=getattr(settings, "BILLING_URL", None),
            upload_url=getattr(settings, "STORAGE_UPLOAD_URL", None),
            http_timeout=float(getattr(settings, "HTTP_TIMEOUT", 10)),
            shift_minutes=int(getattr(settings, "SHIFT_MINUTES", 480)),
        )
        container.store.refresh()
        container.progress_service.reload_active_flats()

    app.extensions["facility_container"] = container

    register_progress(app, container)
    register_tasks(app, container)
    register_attendance(app, container)
    register_supplies(app, container)
    register_staff(app, container)
    register_store(app, container)

    return app
