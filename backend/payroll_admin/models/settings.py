"""
System settings model: one JSON blob per category.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from ..database import Base


class SystemSetting(Base):
    """Category-keyed configuration blob.

    The ``settings`` value is stored as-is and never interpreted here.
    Timestamps are assigned by the database.
    """

    __tablename__ = "system_settings"

    category = Column(String, primary_key=True)
    settings = Column(JSON, nullable=False)
    updated_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self):
        return f"<SystemSetting(category={self.category}, updated_by={self.updated_by})>"
