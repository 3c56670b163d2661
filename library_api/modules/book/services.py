"""Book management service."""

from typing import Any, List, cast

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.logging import get_logger
from ..common.constants import BOOK_SERVICE
from ..common.exceptions import BookNotFoundError, BookTitleExistsError, ResourceInUseError
from ..common.utils.operations import service_operation
from .crud import book_crud
from .models import Book
from .schemas import BookCreate, BookRead, BookUpdate

logger = get_logger(__name__)


class BookService:
    """Service for managing the book catalogue.

    Titles are unique across books. Quantities are set as given on create
    and update; only the borrow workflow moves them afterwards.
    """

    @service_operation(f"{BOOK_SERVICE} - CreateBook")
    async def create_book(
        self,
        book_data: BookCreate,
        db: AsyncSession,
    ) -> BookRead:
        """Create a new book.

        Args:
            book_data: Book creation data
            db: Database session

        Returns:
            The stored book

        Raises:
            BookTitleExistsError: Another book already has this title
        """
        await self._ensure_title_available(book_data.title, db)

        created_book = cast(Any, await book_crud.create(db=db, object=book_data))
        logger.info("Book created", extra={"book_id": created_book.id, "quantity": created_book.quantity})

        return BookRead.model_validate(created_book)

    @service_operation(f"{BOOK_SERVICE} - GetBook")
    async def get_book(
        self,
        book_id: int,
        db: AsyncSession,
    ) -> BookRead:
        """Get a specific book.

        Raises:
            BookNotFoundError: No book has this id
        """
        book = await book_crud.get(db=db, schema_to_select=BookRead, return_as_model=True, id=book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return cast(BookRead, book)

    @service_operation(f"{BOOK_SERVICE} - GetAllBooks")
    async def get_books(self, db: AsyncSession) -> List[BookRead]:
        """Get all books in id order."""
        stmt = await book_crud.select(schema_to_select=BookRead, sort_columns="id")
        result = await db.execute(stmt)
        return [BookRead.model_validate(row) for row in result.mappings().all()]

    @service_operation(f"{BOOK_SERVICE} - UpdateBook")
    async def update_book(
        self,
        book_id: int,
        book_data: BookUpdate,
        db: AsyncSession,
    ) -> BookRead:
        """Overwrite the title and quantity of a book.

        Keeping the book's current title skips the uniqueness check, which
        is how quantity-only edits are made. The new quantity is not
        compared with the number of copies currently lent out.

        Args:
            book_id: Book ID to update
            book_data: The new title and quantity
            db: Database session

        Returns:
            The updated book

        Raises:
            BookNotFoundError: No book has this id
            BookTitleExistsError: A different book already has the new title
        """
        await self.book_exists(book_id, db)

        if not await book_crud.exists(db=db, id=book_id, title=book_data.title):
            await self._ensure_title_available(book_data.title, db)

        await book_crud.update(db=db, object=book_data, id=book_id)
        logger.info("Book updated", extra={"book_id": book_id, "quantity": book_data.quantity})

        return await self.get_book(book_id, db)

    @service_operation(f"{BOOK_SERVICE} - DeleteBook")
    async def delete_book(
        self,
        book_id: int,
        db: AsyncSession,
    ) -> None:
        """Delete a book by id.

        Deleting an id that does not exist is not an error.

        Raises:
            ResourceInUseError: Borrow records still reference the book
        """
        try:
            result = await db.execute(delete(Book).where(Book.id == book_id))
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise ResourceInUseError(f"Book with id {book_id} has borrow records and cannot be deleted") from e

        logger.info("Book deleted", extra={"book_id": book_id, "rows_deleted": result.rowcount})

    @service_operation(f"{BOOK_SERVICE} - bookExists")
    async def book_exists(self, book_id: int, db: AsyncSession) -> None:
        """Check that a book exists.

        Raises:
            BookNotFoundError: No book has this id
        """
        if not await book_crud.exists(db=db, id=book_id):
            raise BookNotFoundError(book_id)

    @service_operation(f"{BOOK_SERVICE} - titleExists")
    async def _ensure_title_available(self, title: str, db: AsyncSession) -> None:
        if await book_crud.exists(db=db, title=title):
            raise BookTitleExistsError(title)
