"""Declarative base and shared column mixins."""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdMixin:
    """Integer surrogate primary key."""

    id = Column(Integer, primary_key=True, autoincrement=True)


class TimestampMixin:
    """Creation and update timestamps."""

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
