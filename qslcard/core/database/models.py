"""
Database models for QSL Card Manager.

This module defines SQLAlchemy ORM models for the database schema.
The user table is defined with fastapi-users in core/auth/models.py.
"""

import datetime as dt
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

Base: Any = declarative_base()


def utcnow() -> datetime:
    """Return the current UTC time."""
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Creation and modification timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class QslLog(TimestampMixin, Base):
    """A single logged contact owned by one operator."""

    __tablename__ = "qsl_logs"
    __table_args__ = (Index("ix_qsl_logs_user_id_date", "user_id", "date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    contact_call: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    contact_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    frequency: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    mode: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    band: Mapped[str] = mapped_column(String(16), nullable=False, default="")
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[str] = mapped_column(String(8), nullable=False, default="")
    rst_sent: Mapped[str] = mapped_column(String(8), nullable=False, default="")
    rst_received: Mapped[str] = mapped_column(String(8), nullable=False, default="")
    power: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    antenna: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    qth: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    locator: Mapped[str] = mapped_column(String(10), nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    qsl_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    qsl_received: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<QslLog id={self.id} call={self.contact_call} date={self.date}>"


class CardTemplate(TimestampMixin, Base):
    """An HTML/CSS card layout with ``{{field}}`` tokens."""

    __tablename__ = "card_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    html_content: Mapped[str] = mapped_column(Text, nullable=False)
    css_content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True
    )

    def __repr__(self) -> str:
        return f"<CardTemplate id={self.id} name={self.name!r}>"
