"""Book API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ....modules.book.schemas import BookCreate, BookRead, BookUpdate
from ....modules.book.services import BookService
from ....modules.common.schemas import MessageResponse
from ....modules.common.utils.error_handler import handle_exception
from ..dependencies import DbSession, get_book_service

router = APIRouter(tags=["Books"])


@router.post(
    "/book",
    status_code=status.HTTP_201_CREATED,
    summary="Create Book",
    description="""
    Adds a book to the catalogue.

    - **title**: Book title, unique across books
    - **quantity**: Number of copies, at least 1
    """,
    responses={
        201: {"description": "Book created successfully"},
        400: {"description": "Invalid book data"},
        409: {"description": "A book with this title already exists"},
    },
)
async def create_book(
    book_data: BookCreate,
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> MessageResponse:
    """Create a new book."""
    try:
        await book_service.create_book(book_data, db)
        return MessageResponse(message="Book was successfully created")
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.get(
    "/book/{book_id}",
    summary="Get Book",
    description="Retrieves a single book by ID, including its current quantity.",
    responses={
        200: {"description": "Book details"},
        400: {"description": "Book ID is not an integer"},
        404: {"description": "Book not found"},
    },
)
async def get_book(
    book_id: int,
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> BookRead:
    """Get a specific book by ID."""
    try:
        return await book_service.get_book(book_id, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.get(
    "/books",
    summary="List Books",
    description="Retrieves every book ordered by ID, including books with no copies left.",
    responses={
        200: {"description": "List of books"},
    },
)
async def get_books(
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> List[BookRead]:
    """Get all books."""
    try:
        return await book_service.get_books(db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.put(
    "/book/{book_id}",
    summary="Update Book",
    description="""
    Replaces the title and quantity of a book.

    - **book_id**: ID of the book to update
    - **title**: New title; keeping the current title allows quantity-only edits
    - **quantity**: New number of copies

    **Note**: The quantity is not checked against copies currently borrowed.
    """,
    responses={
        200: {"description": "Book updated successfully"},
        400: {"description": "Invalid book data"},
        404: {"description": "Book not found"},
        409: {"description": "Another book already has this title"},
    },
)
async def update_book(
    book_id: int,
    book_data: BookUpdate,
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> MessageResponse:
    """Update a book."""
    try:
        await book_service.update_book(book_id, book_data, db)
        return MessageResponse(message="Book was updated successfully")
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.delete(
    "/book/{book_id}",
    summary="Delete Book",
    description="""
    Deletes a book by ID. Deleting an ID that does not exist succeeds.

    A book that still has borrow records, returned or not, cannot be deleted.
    """,
    responses={
        200: {"description": "Book deleted"},
        400: {"description": "Book ID is not an integer"},
        409: {"description": "Book has borrow records"},
    },
)
async def delete_book(
    book_id: int,
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> MessageResponse:
    """Delete a book."""
    try:
        await book_service.delete_book(book_id, db)
        return MessageResponse(message="Book was deleted successfully")
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
