"""
FastAPI Users models for QSL Card Manager.

This module defines the operator account model that extends the FastAPI Users
base table with station profile fields.
"""

from typing import Optional

from fastapi_users.db import SQLAlchemyBaseUserTable
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..database.models import Base, TimestampMixin


class User(SQLAlchemyBaseUserTable[int], TimestampMixin, Base):
    """Operator account extending FastAPI Users base."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(
        String(50), unique=True, index=True, nullable=False
    )
    callsign: Mapped[Optional[str]] = mapped_column(
        String(20), unique=True, index=True, nullable=True
    )

    # Station profile, used as fallback values on exported cards
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    qth: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    locator: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    power: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    antenna: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    @property
    def display_call(self) -> str:
        """Callsign to print on cards, falling back to the username."""
        return self.callsign or self.username

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
