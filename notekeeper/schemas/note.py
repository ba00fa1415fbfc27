"""
Note Schemas.

Pydantic schemas for notes handed to callers of the store.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from notekeeper.core.exceptions import CorruptRecord
from notekeeper.core.utils import parse_timestamp


class NoteRecord(BaseModel):
    """
    A persisted note as seen by callers.

    Timestamps are parsed from their stored ISO-8601 text. Anything that
    is not ISO-8601 fails validation instead of being coerced.
    """

    id: int = Field(gt=0, description="Note unique identifier")
    title: str | None = Field(default=None, description="Note title")
    body: str | None = Field(default=None, description="Note body")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last update timestamp (UTC)")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _parse_iso_timestamp(cls, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        return parse_timestamp(value)

    @classmethod
    def from_row(cls, row: Any) -> "NoteRecord":
        """
        Build a record from a Note row.

        Raises:
            CorruptRecord: If a timestamp or required field cannot be parsed
        """
        try:
            return cls.model_validate(row)
        except ValidationError as e:
            note_id = getattr(row, "id", None)
            raise CorruptRecord(
                f"Note {note_id} has unreadable fields",
                note_id=note_id,
                details={
                    "fields": [".".join(str(p) for p in err["loc"]) for err in e.errors()],
                },
            ) from e

    @property
    def share_text(self) -> str:
        """Title and body joined by a newline, as shared or copied."""
        return f"{self.title or ''}\n{self.body or ''}"
