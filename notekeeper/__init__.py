"""
Notekeeper.

Local, single-user note storage with save-on-exit editing.

- core/: Configuration, logging, exceptions, database engine
- models/: SQLAlchemy table definitions
- repositories/: Data access
- schemas/: Pydantic records handed to callers
- services/: NoteStore and EditSession
- cli/: Command-line client (Typer + Rich)
"""

__version__ = "0.1.0"
