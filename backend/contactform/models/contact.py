"""Contact ORM - one durable row per accepted submission.

Invariants:
    - id is an autoincrement integer primary key; SQLite AUTOINCREMENT keeps
      ids strictly increasing and never reused
    - created_at is assigned by the database at insert time, never by the client
    - Rows are inserted once and never updated or deleted by this service

Design Decisions:
    - server_default over a Python default: the timestamp comes from the same
      statement that creates the row
"""

from datetime import datetime

from sqlalchemy import Integer, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from contactform.db.base import Base


class ContactRecord(Base):
    """A stored contact form submission."""
    __tablename__ = "contacts"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.current_timestamp(),
    )
