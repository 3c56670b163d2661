"""Book borrowing API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ....modules.book.schemas import BookRead
from ....modules.book_borrow.schemas import BookBorrowRead, BookBorrowRequest
from ....modules.book_borrow.services import BookBorrowService
from ....modules.common.schemas import MessageResponse
from ....modules.common.utils.error_handler import handle_exception
from ..dependencies import DbSession, get_book_borrow_service

router = APIRouter(tags=["Book Borrowing"])


@router.get(
    "/book_borrow",
    summary="List Available Books",
    description="Retrieves every book with at least one copy left to borrow.",
    responses={
        200: {"description": "List of available books"},
    },
)
async def get_available_books(
    db: DbSession,
    borrow_service: BookBorrowService = Depends(get_book_borrow_service),
) -> List[BookRead]:
    """Get books that can currently be borrowed."""
    try:
        return await borrow_service.get_available_books(db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.get(
    "/book_borrowed",
    summary="List Active Borrows",
    description="Retrieves every borrow record that has not been returned yet.",
    responses={
        200: {"description": "List of active borrow records"},
    },
)
async def all_borrowed_books(
    db: DbSession,
    borrow_service: BookBorrowService = Depends(get_book_borrow_service),
) -> List[BookBorrowRead]:
    """Get active borrow records."""
    try:
        return await borrow_service.all_borrowed_books(db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post(
    "/book_borrow",
    summary="Borrow Book",
    description="""
    Lends one copy of a book to a user.

    - **book_id**: ID of the book to borrow
    - **user_id**: ID of the user borrowing it

    The book's quantity drops by one. A user cannot hold two copies of the
    same book at once.
    """,
    responses={
        200: {"description": "Book borrowed successfully"},
        400: {"description": "Invalid borrow request"},
        404: {"description": "Book or user not found"},
        409: {"description": "Book is not available or already borrowed by this user"},
    },
)
async def borrow_book(
    borrow_data: BookBorrowRequest,
    db: DbSession,
    borrow_service: BookBorrowService = Depends(get_book_borrow_service),
) -> MessageResponse:
    """Borrow a book."""
    try:
        await borrow_service.borrow_book(borrow_data.book_id, borrow_data.user_id, db)
        return MessageResponse(message="Book was successfully borrowed")
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.put(
    "/book_borrow",
    summary="Return Book",
    description="""
    Takes back a book the user currently holds.

    - **book_id**: ID of the book being returned
    - **user_id**: ID of the user returning it

    The borrow record gets its return date and the book's quantity rises by one.
    """,
    responses={
        200: {"description": "Book returned successfully"},
        400: {"description": "Invalid return request"},
        409: {"description": "The user has not borrowed this book"},
    },
)
async def return_book(
    borrow_data: BookBorrowRequest,
    db: DbSession,
    borrow_service: BookBorrowService = Depends(get_book_borrow_service),
) -> MessageResponse:
    """Return a borrowed book."""
    try:
        await borrow_service.return_book(borrow_data.book_id, borrow_data.user_id, db)
        return MessageResponse(message="Book was successfully returned")
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
