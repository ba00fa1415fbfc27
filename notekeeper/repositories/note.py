"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.models.note import Note
from notekeeper.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds note-specific queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def insert(
        self,
        title: str | None,
        body: str | None,
        timestamp: str,
    ) -> Note:
        """
        Insert a new note with created_at and updated_at both set to timestamp.

        Returns:
            The created note with its assigned ID
        """
        return await self.create(
            title=title,
            body=body,
            created_at=timestamp,
            updated_at=timestamp,
        )

    async def update_content(
        self,
        id: int,
        title: str | None,
        body: str | None,
        timestamp: str,
    ) -> bool:
        """
        Overwrite title and body of a note and stamp updated_at.

        Returns:
            True if a row was updated, False if no note has this ID
        """
        updated = await self.update_by_id(
            id,
            title=title,
            body=body,
            updated_at=timestamp,
        )
        return updated > 0

    async def get_all_recent_first(self) -> list[Note]:
        """
        Get every note, most recently updated first.

        Ties on updated_at fall back to the newest ID.
        """
        result = await self.session.execute(
            select(Note).order_by(Note.updated_at.desc(), Note.id.desc())
        )
        return list(result.scalars().all())
