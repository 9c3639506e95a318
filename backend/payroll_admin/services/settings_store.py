"""
Settings store: category-keyed configuration blobs.

Every operation is a single round-trip to the database through the session
it is given. No state is kept between calls.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from ..models import SystemSetting
from .errors import InvalidInput, NotFound, StorageFailure

logger = logging.getLogger(__name__)


def _is_missing(blob: Any) -> bool:
    if blob is None:
        return True
    if isinstance(blob, (dict, list, str)) and len(blob) == 0:
        return True
    return False


class SettingsStore:
    """Read and upsert ``SystemSetting`` rows."""

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> Dict[str, Any]:
        """
        Return every stored category mapped to its blob.

        Raises:
            StorageFailure: the query failed
        """
        try:
            rows = self.db.execute(select(SystemSetting)).scalars().all()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageFailure(f"Failed to list settings: {e}", "list") from e

        return {row.category: row.settings for row in rows}

    def get_by_category(self, category: str) -> Any:
        """
        Return the blob stored for ``category``.

        Raises:
            NotFound: nothing was ever written for this category
            StorageFailure: the lookup failed
        """
        try:
            row = self.db.get(SystemSetting, category)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageFailure(
                f"Failed to load settings for {category}: {e}", "get_by_category", category
            ) from e

        if row is None:
            raise NotFound(f"No settings stored for {category}", "get_by_category", category)
        return row.settings

    def upsert(self, category: str, settings: Any, updated_by: Optional[int] = None) -> SystemSetting:
        """
        Insert or replace the blob for ``category`` in one statement.

        Args:
            category: Category key
            settings: Blob to store; must be present and non-empty
            updated_by: Id of the user performing the write

        Returns:
            The stored row, including database-assigned timestamps

        Raises:
            InvalidInput: ``settings`` is missing or empty (nothing is written)
            StorageFailure: the write failed (the session is rolled back)
        """
        if _is_missing(settings):
            raise InvalidInput(f"Empty settings payload for {category}", "upsert", category)

        try:
            stmt = self._insert(category).values(
                category=category, settings=settings, updated_by=updated_by
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[SystemSetting.category],
                set_={
                    "settings": stmt.excluded.settings,
                    "updated_by": stmt.excluded.updated_by,
                    "updated_at": func.now(),
                },
            )
            self.db.execute(stmt)
            self.db.commit()

            row = self.db.execute(
                select(SystemSetting)
                .where(SystemSetting.category == category)
                .execution_options(populate_existing=True)
            ).scalar_one()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageFailure(
                f"Failed to upsert settings for {category}: {e}", "upsert", category
            ) from e

        logger.debug(f"Upserted settings category {category} (updated_by={updated_by})")
        return row

    def _insert(self, category: str):
        """Dialect-specific INSERT supporting ON CONFLICT DO UPDATE."""
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            raise StorageFailure(
                f"Atomic upsert not supported on {dialect}", "upsert", category
            )
        return insert(SystemSetting)
