"""
Edit Session.

Save-on-exit editing for a single note. A session backs one composer
(new note) or editor (existing note) lifetime:

    UNINITIALIZED ──start()──▶ READY_NO_ID ──first insert──▶ READY_WITH_ID
          │                                                     │
          └──start() with an existing note──────────────────────┘
    READY_* ──close() once the save has resolved──▶ CLOSED

Edits only touch in-memory title and body. commit_field() (a field lost
focus) and close() (the screen is being dismissed) write through
NoteStore.create_or_update. close() waits for the store to finish
opening instead of skipping the save, and only reaches CLOSED once the
save succeeded or there was nothing to save. Store failures come back as
a SaveOutcome; the in-memory edits are kept so the caller can retry.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum

from notekeeper.core.exceptions import ApplicationError, SessionClosedError, StoreUnavailable
from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.core.utils import is_blank
from notekeeper.schemas.note import NoteRecord
from notekeeper.services.note import NoteStore

logger = get_logger(__name__)


class SessionState(str, Enum):
    """Lifecycle of an edit session."""

    UNINITIALIZED = "uninitialized"
    READY_NO_ID = "ready_no_id"
    READY_WITH_ID = "ready_with_id"
    CLOSED = "closed"


class SaveStatus(str, Enum):
    """What a save attempt did."""

    SAVED = "saved"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class SaveOutcome:
    """Result of a save attempt."""

    status: SaveStatus
    note_id: int | None = None
    error: ApplicationError | None = None

    @property
    def ok(self) -> bool:
        return self.status is not SaveStatus.FAILED


class EditSession:
    """
    Autosave controller for one composer or editor screen.

    Writes are serialized per session, so a field-commit save and the
    exit save for the same note apply in the order they were triggered.
    """

    def __init__(
        self,
        store: NoteStore,
        note_id: int | None = None,
        title: str | None = "",
        body: str | None = "",
    ) -> None:
        self._store = store
        self._note_id = note_id
        self._title = title
        self._body = body
        # Last content known to be on disk, None until something is persisted
        self._saved: tuple[str | None, str | None] | None = (
            (title, body) if note_id is not None else None
        )
        self._state = SessionState.UNINITIALIZED
        self._lock = asyncio.Lock()
        self.last_error: ApplicationError | None = None

    @classmethod
    def compose(cls, store: NoteStore) -> "EditSession":
        """Session for a brand-new note."""
        return cls(store)

    @classmethod
    def edit(cls, store: NoteStore, note: NoteRecord) -> "EditSession":
        """Session for an existing note. NULL title or body stays None until set."""
        return cls(store, note.id, note.title, note.body)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def note_id(self) -> int | None:
        return self._note_id

    @property
    def title(self) -> str | None:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._check_open()
        self._title = value

    @property
    def body(self) -> str | None:
        return self._body

    @body.setter
    def body(self, value: str) -> None:
        self._check_open()
        self._body = value

    @property
    def is_dirty(self) -> bool:
        """Whether the in-memory content differs from what is persisted."""
        if self._note_id is None:
            return not (is_blank(self._title) and is_blank(self._body))
        return (self._title, self._body) != self._saved

    def _check_open(self) -> None:
        if self._state is SessionState.CLOSED:
            raise SessionClosedError()

    async def start(self) -> bool:
        """
        Wait for the store to be ready.

        Returns:
            True once the session is ready, False if the store is unavailable
            (the session stays UNINITIALIZED and can be started again)
        """
        self._check_open()
        if self._state is not SessionState.UNINITIALIZED:
            return True
        try:
            await self._store.open()
        except StoreUnavailable as e:
            self.last_error = e
            log_with_source(
                logger, "session", "warning", "Store unavailable, session blocked",
                error=e.message,
            )
            return False

        self._state = (
            SessionState.READY_WITH_ID if self._note_id is not None
            else SessionState.READY_NO_ID
        )
        return True

    async def _save(self, trigger: str) -> SaveOutcome:
        async with self._lock:
            if self._state is SessionState.CLOSED:
                # Closed by another caller while this save was queued
                return SaveOutcome(SaveStatus.SKIPPED, self._note_id)
            if self._state is SessionState.UNINITIALIZED and not await self.start():
                return SaveOutcome(SaveStatus.FAILED, self._note_id, self.last_error)

            if not self.is_dirty:
                return SaveOutcome(SaveStatus.SKIPPED, self._note_id)

            title, body = self._title, self._body
            try:
                note_id = await self._store.create_or_update(self._note_id, title, body)
            except ApplicationError as e:
                self.last_error = e
                log_with_source(
                    logger, "session", "warning", "Save failed, edits kept in memory",
                    trigger=trigger, note_id=self._note_id, error=e.message,
                )
                return SaveOutcome(SaveStatus.FAILED, self._note_id, e)

            if note_id is None:
                return SaveOutcome(SaveStatus.SKIPPED, None)

            self._note_id = note_id
            self._saved = (title, body)
            self._state = SessionState.READY_WITH_ID
            self.last_error = None
            log_with_source(
                logger, "session", "debug", "Note saved",
                trigger=trigger, note_id=note_id,
            )
            return SaveOutcome(SaveStatus.SAVED, note_id)

    async def commit_field(self) -> SaveOutcome:
        """
        Save because an input lost focus.

        Raises:
            SessionClosedError: If the session is already closed
        """
        self._check_open()
        return await self._save("field_commit")

    async def close(self) -> SaveOutcome:
        """
        Save and dismiss.

        Blocks until the store has opened (or failed to). The session is
        CLOSED only when the outcome is ok; after a failure it stays open
        with its edits so the caller can retry or abandon().
        """
        if self._state is SessionState.CLOSED:
            return SaveOutcome(SaveStatus.SKIPPED, self._note_id)

        outcome = await self._save("exit")
        if outcome.ok:
            self._state = SessionState.CLOSED
        return outcome

    async def abandon(self) -> None:
        """Dismiss without saving. Unsaved edits are discarded."""
        async with self._lock:
            if self._state is not SessionState.CLOSED and self.is_dirty:
                log_with_source(
                    logger, "session", "info", "Discarding unsaved edits",
                    note_id=self._note_id,
                )
            self._state = SessionState.CLOSED
