"""Common constants used across the application."""

from typing import Any, Callable, Dict

from fastapi import HTTPException, status

from .exceptions import ErrorKind

EXCEPTION_MAPPING: Dict[ErrorKind, Callable[[Any], HTTPException]] = {
    ErrorKind.INVALID_INPUT: lambda message: HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message),
    ErrorKind.NOT_FOUND: lambda message: HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message),
    ErrorKind.CONFLICT: lambda message: HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message),
    ErrorKind.INTERNAL: lambda message: HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message),
}

# Label prefixes for the call path recorded on domain errors.
USER_SERVICE = "userService"
BOOK_SERVICE = "bookService"
BOOK_BORROW_SERVICE = "bookBorrowService"
