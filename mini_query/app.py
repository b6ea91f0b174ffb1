"""Bootstrap: settings -> DB-API connection -> `DatabaseTools`."""

from __future__ import annotations

import importlib
import logging
from typing import Optional

from .config import Settings, get_settings
from .core.service import DatabaseTools
from .observability import setup_logging
from .ports.db_api import Database, dialect_for

logger = logging.getLogger(__name__)

_DRIVER_MODULES = {
    "mysql": "pymysql",
    "postgres": "psycopg",
    "sqlite": "sqlite3",
}


def connect(settings: Settings) -> Database:
    """Open a DB-API connection for `settings` and wrap it in `Database`."""

    module = importlib.import_module(_DRIVER_MODULES[settings.db_driver])
    logger.info("Connecting to %s", settings.describe_target())
    conn = module.connect(**settings.connect_kwargs())
    if settings.db_driver == "postgres":
        conn.autocommit = True
    return Database(conn, dialect_for(settings.db_driver))


def build_tools(
    settings: Optional[Settings] = None, *, configure_logging: bool = False
) -> DatabaseTools:
    """Wire settings, logging and the database adapter into `DatabaseTools`."""

    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_format)
    return DatabaseTools(
        connect(settings),
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
        legacy_separator=settings.legacy_separator,
    )
