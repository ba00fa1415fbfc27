"""
Base Service.

Base class for services providing common patterns for business logic.
Services orchestrate repositories, translate storage failures into
application exceptions, and log what they do.

Usage:
    from notekeeper.services.base import BaseService

    class NoteStore(BaseService):
        async def delete(self, note_id: int) -> None:
            self._log_operation("Deleting note", note_id=note_id)
            await self._execute_db_operation("delete_note", self._delete(note_id))
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from notekeeper.core.exceptions import PersistenceError
from notekeeper.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Logging context
    - Error wrapping for database operations
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy and OS-level
        exceptions to PersistenceError. There is no retry.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute

        Returns:
            Result of the coroutine

        Raises:
            PersistenceError: For any database or I/O error
        """
        try:
            return await coro
        except (SQLAlchemyError, OSError) as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise PersistenceError(f"Database operation failed: {operation}") from e

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
