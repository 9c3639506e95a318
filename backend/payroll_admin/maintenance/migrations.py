"""
One-off schema migrations for databases created before a column existed.
"""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


def add_work_schedule_column(engine: Engine) -> bool:
    """
    Add ``employees.work_schedule`` when it is missing.

    Returns:
        True when the column was added, False when it already existed or the
        employees table does not exist yet
    """
    inspector = inspect(engine)
    if not inspector.has_table("employees"):
        logger.warning("Table employees does not exist, nothing to migrate")
        return False

    columns = {column["name"] for column in inspector.get_columns("employees")}
    if "work_schedule" in columns:
        logger.info("Column employees.work_schedule already present")
        return False

    try:
        with engine.begin() as conn:
            conn.execute(text("ALTER TABLE employees ADD COLUMN work_schedule TEXT"))
    except SQLAlchemyError as e:
        logger.error(f"Error adding column employees.work_schedule: {e}")
        raise

    logger.info("✓ Added column employees.work_schedule")
    return True
