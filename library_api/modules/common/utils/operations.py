"""Decorator bounding and labelling service operations."""

import asyncio
import functools
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from ....infrastructure.config.settings import get_settings
from ....infrastructure.logging import get_logger
from ..exceptions import DomainError, OperationTimeoutError, StoreError

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def service_operation(label: str) -> Callable[[F], F]:
    """Run an async service method under the operation timeout.

    Domain errors are re-raised with `label` appended to their call path.
    Unexpected database errors are logged and re-raised as StoreError, and
    exceeding OPERATION_TIMEOUT_SECONDS raises OperationTimeoutError. There
    are no retries.

    Args:
        label: Name recorded on errors and in logs, e.g. "bookService - CreateBook"

    Example:
        ```python
        class BookService:
            @service_operation("bookService - GetBook")
            async def get_book(self, book_id: int, db: AsyncSession) -> BookRead:
                ...
        ```
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            timeout_seconds = get_settings().OPERATION_TIMEOUT_SECONDS
            try:
                async with asyncio.timeout(timeout_seconds):
                    return await func(*args, **kwargs)
            except DomainError as e:
                e.add_operation(label)
                raise
            except TimeoutError as e:
                logger.error(f"{label}: operation timed out after {timeout_seconds}s")
                raise OperationTimeoutError("Operation timed out", operation=label) from e
            except SQLAlchemyError as e:
                logger.error(f"{label}: database error: {e}", exc_info=True)
                raise StoreError(f"Database error during {label}", operation=label) from e

        return wrapper  # type: ignore[return-value]

    return decorator
