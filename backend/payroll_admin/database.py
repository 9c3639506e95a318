"""
Database connection and session management.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from .config import settings

logger = logging.getLogger(__name__)

# Create database engine
engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if "sqlite" in settings.database_url else {},
    echo=settings.debug,
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db() -> Session:
    """
    Dependency function to get database session.
    Usage: Depends(get_db) in FastAPI endpoints.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Create all tables and make sure the default admin user exists.
    """
    from . import models  # noqa: F401  register every table on Base.metadata
    from .maintenance.seed import seed_admin_user

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("✓ Database initialized")

    db = sessionmaker(autocommit=False, autoflush=False, bind=bind)()
    try:
        seed_admin_user(db)
    finally:
        db.close()
