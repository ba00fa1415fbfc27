"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Each test gets its own SQLite file under pytest's tmp_path, so no test
    can see another test's notes. The store fixture opens the file and
    closes it again after the test.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from notekeeper.services.note import NoteStore


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a not-yet-created notes database."""
    return tmp_path / "notes.db"


@pytest.fixture
async def store(db_path: Path) -> AsyncGenerator[NoteStore, None]:
    """
    Provide an open NoteStore backed by a fresh SQLite file.

    Usage:
        async def test_insert(store: NoteStore):
            note_id = await store.create_or_update(None, "Hi", "Body")
            assert note_id == 1
    """
    note_store = NoteStore(db_path)
    await note_store.open()
    yield note_store
    await note_store.close()


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def clear_config_cache():
    """Clear lru_cache around a test so env overrides are picked up."""
    from notekeeper.core.config import get_app_config, get_settings

    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
