"""
Note Store.

Persistence façade around the notes table. Owns schema initialization,
every read and write, ordering, and the in-memory title filter.

One NoteStore instance wraps one SQLite connection. All statements are
serialized through a single asyncio.Lock, and every operation waits for
open() to finish before touching the database.

Usage:
    async with NoteStore(path) as store:
        note_id = await store.create_or_update(None, "Hi", "Body")
        notes = await store.list_all()
        matches = store.filter(notes, "hi")
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from notekeeper.core.config import get_app_config, get_database_path
from notekeeper.core.database import (
    build_database_url,
    create_engine,
    create_session_factory,
    session_scope,
)
from notekeeper.core.exceptions import CorruptRecord, PersistenceError, StoreUnavailable
from notekeeper.core.utils import MonotonicClock, format_timestamp, is_blank
from notekeeper.models.base import Base
from notekeeper.repositories.note import NoteRepository
from notekeeper.schemas.note import NoteRecord
from notekeeper.services.base import BaseService

T = TypeVar("T")


def filter_notes(notes: Sequence[NoteRecord], query: str | None) -> Sequence[NoteRecord]:
    """
    Filter a snapshot of notes by title.

    Case-insensitive substring match against the title only. Notes without
    a title never match a non-empty query. A blank query returns the input
    sequence itself, in the same order.

    This is a pure in-memory operation. It does not read the store and
    therefore does not see writes made after the snapshot was taken.
    """
    if is_blank(query):
        return notes
    needle = query.casefold()
    return [note for note in notes if note.title and needle in note.title.casefold()]


class NoteStore(BaseService):
    """
    Sole owner of the notes table.

    Lifecycle: construct, open(), use, close(). open() is idempotent and
    safe to call from several places at once; concurrent callers share
    one attempt. A closed store cannot be reopened.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        echo: bool = False,
        timeout: float = 5.0,
    ) -> None:
        super().__init__()
        self._path = None if str(path) == ":memory:" else Path(path)
        self._url = build_database_url(path)
        self._echo = echo
        self._timeout = timeout

        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._lock = asyncio.Lock()
        self._clock = MonotonicClock()
        self._opening: asyncio.Task | None = None
        self._ready = False
        self._closed = False

    @classmethod
    def from_config(cls) -> "NoteStore":
        """Build a store for the database configured in database.yaml."""
        db_config = get_app_config().database
        return cls(
            get_database_path(),
            echo=db_config.echo,
            timeout=db_config.timeout,
        )

    @property
    def location(self) -> str:
        """Database file path, or ':memory:'."""
        return str(self._path) if self._path is not None else ":memory:"

    @property
    def is_ready(self) -> bool:
        """Whether open() has completed successfully."""
        return self._ready

    async def __aenter__(self) -> "NoteStore":
        return await self.open()

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def open(self) -> "NoteStore":
        """
        Open the database and create the notes table if absent.

        Returns:
            The ready store

        Raises:
            StoreUnavailable: If the file cannot be opened, the schema
                statement fails, or the store was closed
        """
        if self._ready:
            return self
        if self._closed:
            raise StoreUnavailable("Note store has been closed")

        if self._opening is None or self._opening.done():
            self._opening = asyncio.get_running_loop().create_task(self._open())

        # Shielded so a cancelled caller does not abort initialization
        # for everyone else waiting on it.
        await asyncio.shield(self._opening)
        if self._closed:
            raise StoreUnavailable("Note store has been closed")
        return self

    async def _open(self) -> None:
        self._log_operation("Opening note store", location=self.location)
        try:
            if self._path is not None:
                self._path.parent.mkdir(parents=True, exist_ok=True)
            if self._engine is None:
                self._engine = create_engine(
                    self._url,
                    echo=self._echo,
                    timeout=self._timeout,
                )
                self._session_factory = create_session_factory(self._engine)
            async with self._lock:
                async with self._engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            self._logger.error(
                "Note store unavailable",
                extra={"location": self.location, "error": str(e)},
            )
            await self._dispose()
            raise StoreUnavailable(
                f"Could not open note store at {self.location}"
            ) from e

        # close() may have run while this attempt was in flight
        self._ready = not self._closed
        self._log_debug("Note store ready", location=self.location)

    async def close(self) -> None:
        """Release the database connection. Further operations fail."""
        self._closed = True
        self._ready = False
        if self._opening is not None and not self._opening.done():
            # Let an in-flight open finish before the engine goes away
            await asyncio.gather(self._opening, return_exceptions=True)
        async with self._lock:
            await self._dispose()
        self._log_debug("Note store closed", location=self.location)

    async def _dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def _run(
        self,
        operation: str,
        work: Callable[[NoteRepository], Awaitable[T]],
    ) -> T:
        """Wait for the store, then run work in its own serialized transaction."""
        await self.open()
        async with self._lock:
            if self._session_factory is None:
                raise StoreUnavailable("Note store has been closed")
            return await self._execute_db_operation(
                operation,
                self._in_session(work),
            )

    async def _in_session(self, work: Callable[[NoteRepository], Awaitable[T]]) -> T:
        async with session_scope(self._session_factory) as session:
            return await work(NoteRepository(session))

    def _timestamp(self) -> str:
        return format_timestamp(self._clock.tick())

    async def create_or_update(
        self,
        note_id: int | None,
        title: str | None,
        body: str | None,
    ) -> int | None:
        """
        Save a note.

        With a note_id, overwrite title and body of that row and stamp
        updated_at. A missing row is not an error and is not re-created.

        Without a note_id, insert a new row unless title and body are both
        blank, in which case nothing is written.

        Args:
            note_id: ID of a persisted note, or None for a new note
            title: Note title
            body: Note body

        Returns:
            The note's ID, or None when a blank new note was skipped

        Raises:
            StoreUnavailable: If the store cannot be opened
            PersistenceError: If the write fails or the insert yields no ID
        """
        if note_id is not None:
            return await self._update(note_id, title, body)

        if is_blank(title) and is_blank(body):
            self._log_debug("Skipping blank new note")
            return None

        return await self._insert(title, body)

    async def _insert(self, title: str | None, body: str | None) -> int:
        self._log_operation("Creating note", title=title)

        async def work(repo: NoteRepository) -> int | None:
            note = await repo.insert(title, body, self._timestamp())
            return note.id

        note_id = await self._run("create_note", work)
        if not isinstance(note_id, int) or note_id <= 0:
            self._logger.error("Insert returned no valid id", extra={"note_id": note_id})
            raise PersistenceError("Insert did not return a valid note id")

        self._log_debug("Note created", note_id=note_id)
        return note_id

    async def _update(self, note_id: int, title: str | None, body: str | None) -> int:
        self._log_operation("Updating note", note_id=note_id)

        async def work(repo: NoteRepository) -> bool:
            return await repo.update_content(note_id, title, body, self._timestamp())

        if not await self._run("update_note", work):
            self._logger.warning("Note to update no longer exists", extra={"note_id": note_id})
        return note_id

    async def list_all(self) -> list[NoteRecord]:
        """
        Get every note, most recently updated first.

        Rows with unreadable timestamps or fields are left out and logged,
        so one corrupt row cannot hide the rest.

        Raises:
            StoreUnavailable: If the store cannot be opened
            PersistenceError: If the query fails
        """
        rows = await self._run("list_notes", lambda repo: repo.get_all_recent_first())

        notes = []
        for row in rows:
            try:
                notes.append(NoteRecord.from_row(row))
            except CorruptRecord as e:
                self._logger.warning(
                    "Skipping corrupt note",
                    extra={"note_id": e.note_id, "fields": e.details.get("fields")},
                )
        return notes

    async def get(self, note_id: int) -> NoteRecord | None:
        """
        Get a single note by ID.

        Returns:
            The note, or None if it does not exist

        Raises:
            CorruptRecord: If the stored row cannot be parsed
        """
        row = await self._run("get_note", lambda repo: repo.get_by_id_or_none(note_id))
        if row is None:
            return None
        return NoteRecord.from_row(row)

    async def delete(self, note_id: int) -> None:
        """
        Delete a note. Deleting a missing note is a no-op.

        Confirmation is the caller's job; this deletes immediately.

        Raises:
            PersistenceError: If the delete fails
        """
        self._log_operation("Deleting note", note_id=note_id)

        deleted = await self._run("delete_note", lambda repo: repo.delete_by_id(note_id))
        if not deleted:
            self._log_debug("Note to delete did not exist", note_id=note_id)

    async def count(self) -> int:
        """Get the number of stored notes."""
        return await self._run("count_notes", lambda repo: repo.count())

    @staticmethod
    def filter(notes: Sequence[NoteRecord], query: str | None) -> Sequence[NoteRecord]:
        """Filter a snapshot by title. See filter_notes."""
        return filter_notes(notes, query)
