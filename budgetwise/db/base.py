"""
Declarative base and the common columns shared by every table.
"""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.orm import declarative_base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


Base = declarative_base()


class BaseModel(Base):
    """Abstract model with integer primary key and timestamps."""
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
