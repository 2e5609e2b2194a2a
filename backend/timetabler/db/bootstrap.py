from __future__ import annotations

import logging

from sqlalchemy import inspect

import timetabler.models  # noqa: F401
from timetabler.db.base import Base
from timetabler.db.session import engine

logger = logging.getLogger(__name__)


def ensure_runtime_schema() -> None:
    """Create missing tables when the database was never migrated."""
    with engine.begin() as connection:
        existing = set(inspect(connection).get_table_names())
        missing = [table for name, table in Base.metadata.tables.items() if name not in existing]
        if not missing:
            return
        logger.info("Creating missing tables: %s", ", ".join(table.name for table in missing))
        Base.metadata.create_all(bind=connection, tables=missing)
