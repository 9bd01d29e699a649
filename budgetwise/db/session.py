"""
Database session management.

The engine is built by the application lifespan and kept on ``app.state``;
request handlers receive a session through the ``get_db`` dependency.
"""
from typing import Iterator
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from budgetwise.core.config import Settings
from budgetwise.db.base import Base


def create_db_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database."""
    if settings.DATABASE_URL.startswith("sqlite"):
        return create_engine(
            settings.DATABASE_URL,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_recycle=3600
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine):
    """Initialize database tables."""
    # Import all models so SQLAlchemy can register them
    import budgetwise.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
