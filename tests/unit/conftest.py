"""
Unit Test Fixtures.

Fixtures for unit tests - the store is mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from notekeeper.schemas.note import NoteRecord
from notekeeper.services.note import NoteStore


# =============================================================================
# Store Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_store() -> AsyncMock:
    """
    Mock NoteStore for unit tests.

    open() succeeds and create_or_update() returns id 7 by default.

    Usage:
        async def test_save(mock_store: AsyncMock):
            session = EditSession.compose(mock_store)
            ...
            mock_store.create_or_update.assert_awaited_once()
    """
    store = AsyncMock(spec=NoteStore)
    store.open.return_value = store
    store.create_or_update.return_value = 7
    return store


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def note_factory() -> Callable[..., NoteRecord]:
    """
    Build NoteRecord values without a database.

    Usage:
        def test_filter(note_factory):
            notes = [note_factory(id=1, title="Groceries")]
    """
    def _make(
        id: int = 1,
        title: str | None = "Title",
        body: str | None = "Body",
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> NoteRecord:
        created = created_at or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        return NoteRecord(
            id=id,
            title=title,
            body=body,
            created_at=created,
            updated_at=updated_at or created,
        )

    return _make
