"""
Note Model.

Database model for notes, the only persisted entity.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.models.base import Base, IntegerIdMixin, TimestampMixin


class Note(IntegerIdMixin, TimestampMixin, Base):
    """
    Note database model.

    Maps the on-disk table:

        notes(id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT NULL,
              body TEXT NULL, created_at TEXT, updated_at TEXT)

    AUTOINCREMENT keeps ids of deleted notes from being reused.
    """

    __tablename__ = "notes"
    __table_args__ = {"sqlite_autoincrement": True}

    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
