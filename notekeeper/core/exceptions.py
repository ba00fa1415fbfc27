"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class StoreUnavailable(ApplicationError):
    """Raised when the note store cannot be opened or its schema created."""

    def __init__(self, message: str = "Note store unavailable") -> None:
        super().__init__(message, code="STORE_UNAVAILABLE")


class PersistenceError(ApplicationError):
    """Raised when an insert, update or delete fails on an open store."""

    def __init__(self, message: str = "Note could not be saved") -> None:
        super().__init__(message, code="STORE_PERSISTENCE_ERROR")


class CorruptRecord(ApplicationError):
    """Raised when a stored row has an unparsable timestamp or missing field."""

    def __init__(
        self,
        message: str = "Corrupt note record",
        note_id: int | None = None,
        details: dict | None = None,
    ) -> None:
        self.note_id = note_id
        self.details = details or {}
        super().__init__(message, code="STORE_CORRUPT_RECORD")


class SessionClosedError(ApplicationError):
    """Raised when an edit session is used after it was closed."""

    def __init__(self, message: str = "Edit session is closed") -> None:
        super().__init__(message, code="SESSION_CLOSED")
