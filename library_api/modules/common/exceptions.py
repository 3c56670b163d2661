"""Domain exception classes for business logic errors."""

from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    """Category of a domain error, used to pick the HTTP status."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class DomainError(Exception):
    """Base class for all domain-specific errors.

    Carries the list of service operations the error travelled through,
    innermost first, so logs show the call path that produced it.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operations: List[str] = [operation] if operation else []

    def add_operation(self, operation: str) -> None:
        if not self.operations or self.operations[-1] != operation:
            self.operations.append(operation)

    @property
    def call_path(self) -> str:
        return " <- ".join(self.operations)


class ResourceNotFoundError(DomainError):
    """Raised when a requested resource cannot be found."""

    kind = ErrorKind.NOT_FOUND


class ResourceExistsError(DomainError):
    """Raised when attempting to create a resource that already exists."""

    kind = ErrorKind.CONFLICT


class ResourceInUseError(DomainError):
    """Raised when a resource cannot be removed because other rows reference it."""

    kind = ErrorKind.CONFLICT


class StoreError(DomainError):
    """Raised when the database fails in an unexpected way."""

    kind = ErrorKind.INTERNAL


class OperationTimeoutError(StoreError):
    """Raised when a service operation does not finish within its time bound."""


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User with id {user_id} does not exist")


class UserExistsError(ResourceExistsError):
    def __init__(self, first_name: str, last_name: str):
        super().__init__(f"User with this name: {first_name}, and last name: {last_name}, already exists")


class BookNotFoundError(ResourceNotFoundError):
    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} does not exist")


class BookTitleExistsError(ResourceExistsError):
    def __init__(self, title: str):
        super().__init__(f"Book with title {title}, already exists")


class BookNotAvailableError(ResourceExistsError):
    """Raised when a book has no copies left to lend."""

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__("Book is not available")


class BookAlreadyBorrowedError(ResourceExistsError):
    """Raised when the user already holds an active borrow of the book."""

    def __init__(self, book_id: int, user_id: int):
        self.book_id = book_id
        self.user_id = user_id
        super().__init__("Book is already borrowed")


class BookNotBorrowedError(ResourceExistsError):
    """Raised when returning a book the user does not currently hold."""

    def __init__(self, book_id: int, user_id: int):
        self.book_id = book_id
        self.user_id = user_id
        super().__init__("Book is not borrowed")
