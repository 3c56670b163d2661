"""Book borrowing workflow."""

import asyncio
from datetime import UTC, datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.logging import get_logger
from ..book.models import Book
from ..book.schemas import BookRead
from ..common.constants import BOOK_BORROW_SERVICE
from ..common.exceptions import (
    BookAlreadyBorrowedError,
    BookNotAvailableError,
    BookNotBorrowedError,
    BookNotFoundError,
)
from ..common.utils.operations import service_operation
from ..user.services import UserService
from .models import BookBorrow
from .schemas import BookBorrowRead

logger = get_logger(__name__)


class BookBorrowService:
    """Service lending books to users and taking them back.

    Each (book, user) pair moves from not borrowed to an active borrow and
    then to returned; a returned pair may borrow again. Borrowing and
    returning each run as one transaction: the book or borrow row is locked
    with SELECT ... FOR UPDATE and the quantity decrement only applies while
    copies remain, so concurrent borrowers cannot take more copies than
    exist.

    A failure at any step, including cancellation by the operation
    timeout, rolls the whole transaction back.
    """

    def __init__(self, user_service: Optional[UserService] = None):
        self.user_service = user_service or UserService()

    @service_operation(f"{BOOK_BORROW_SERVICE} - GetAvailableBooks")
    async def get_available_books(self, db: AsyncSession) -> List[BookRead]:
        """Get every book with at least one copy available."""
        result = await db.execute(select(Book).where(Book.quantity > 0).order_by(Book.id))
        return [BookRead.model_validate(book) for book in result.scalars().all()]

    @service_operation(f"{BOOK_BORROW_SERVICE} - AllBorrowedBooks")
    async def all_borrowed_books(self, db: AsyncSession) -> List[BookBorrowRead]:
        """Get every active borrow, i.e. rows not yet returned."""
        result = await db.execute(
            select(BookBorrow).where(BookBorrow.return_date.is_(None)).order_by(BookBorrow.id)
        )
        return [BookBorrowRead.model_validate(borrow) for borrow in result.scalars().all()]

    @service_operation(f"{BOOK_BORROW_SERVICE} - BorrowBook")
    async def borrow_book(
        self,
        book_id: int,
        user_id: int,
        db: AsyncSession,
    ) -> None:
        """Lend one copy of a book to a user.

        Args:
            book_id: Book to borrow
            user_id: User borrowing it
            db: Database session

        Raises:
            BookNotFoundError: No book has this id
            BookNotAvailableError: The book has no copies left
            UserNotFoundError: No user has this id
            BookAlreadyBorrowedError: The user already holds this book
        """
        try:
            result = await db.execute(select(Book.quantity).where(Book.id == book_id).with_for_update())
            quantity = result.scalar_one_or_none()
            if quantity is None:
                raise BookNotFoundError(book_id)
            if quantity <= 0:
                raise BookNotAvailableError(book_id)

            await self.user_service.user_exists(user_id, db)

            if await self._active_borrow_id(book_id, user_id, db) is not None:
                raise BookAlreadyBorrowedError(book_id, user_id)

            db.add(BookBorrow(user_id=user_id, book_id=book_id))

            decremented = await db.execute(
                update(Book)
                .where(Book.id == book_id, Book.quantity > 0)
                .values(quantity=Book.quantity - 1)
            )
            if decremented.rowcount == 0:
                raise BookNotAvailableError(book_id)

            await db.commit()
        except (Exception, asyncio.CancelledError):
            await db.rollback()
            raise

        logger.info("Book borrowed", extra={"book_id": book_id, "user_id": user_id})

    @service_operation(f"{BOOK_BORROW_SERVICE} - ReturnBook")
    async def return_book(
        self,
        book_id: int,
        user_id: int,
        db: AsyncSession,
    ) -> None:
        """Take back a book the user currently holds.

        Raises:
            BookNotBorrowedError: The user holds no active borrow of this book
        """
        try:
            borrow_id = await self._active_borrow_id(book_id, user_id, db, lock=True)
            if borrow_id is None:
                raise BookNotBorrowedError(book_id, user_id)

            await db.execute(
                update(BookBorrow).where(BookBorrow.id == borrow_id).values(return_date=datetime.now(UTC))
            )
            await db.execute(
                update(Book).where(Book.id == book_id).values(quantity=Book.quantity + 1)
            )

            await db.commit()
        except (Exception, asyncio.CancelledError):
            await db.rollback()
            raise

        logger.info("Book returned", extra={"book_id": book_id, "user_id": user_id, "borrow_id": borrow_id})

    async def _active_borrow_id(
        self,
        book_id: int,
        user_id: int,
        db: AsyncSession,
        lock: bool = False,
    ) -> Optional[int]:
        stmt = (
            select(BookBorrow.id)
            .where(
                BookBorrow.book_id == book_id,
                BookBorrow.user_id == user_id,
                BookBorrow.return_date.is_(None),
            )
            .limit(1)
        )
        if lock:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        return result.scalar_one_or_none()
