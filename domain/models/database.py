"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("messplanner.database")

# Create SQLAlchemy Base
Base = declarative_base()


def engine_options(url: str) -> dict:
    """Extra create_engine() keyword arguments for the given database URL"""
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            # A single shared connection keeps the in-memory database alive
            options["poolclass"] = StaticPool
        return options
    return {"pool_pre_ping": True}


# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
    **engine_options(settings.database_url),
)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True)


def init_database(bind=None):
    """Initialize database schema"""
    # Import models so every table is registered on Base.metadata
    from domain.models import meal  # noqa: F401

    with (bind or engine).begin() as conn:
        Base.metadata.create_all(bind=conn)
        logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
