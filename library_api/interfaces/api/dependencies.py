"""FastAPI dependencies for use in API endpoints."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.database import async_session
from ...modules.book.services import BookService
from ...modules.book_borrow.services import BookBorrowService
from ...modules.user.services import UserService

DbSession = Annotated[AsyncSession, Depends(async_session)]


def get_user_service() -> UserService:
    """Dependency for providing a UserService instance."""
    return UserService()


def get_book_service() -> BookService:
    """Dependency for providing a BookService instance."""
    return BookService()


def get_book_borrow_service(user_service: UserService = Depends(get_user_service)) -> BookBorrowService:
    """Dependency for providing a BookBorrowService wired to the user service."""
    return BookBorrowService(user_service=user_service)
