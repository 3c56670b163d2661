"""SQLAlchemy models for book borrow records."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import IntegerIdMixin
from ...infrastructure.database.session import Base


class BookBorrow(Base, IntegerIdMixin):
    """One loan of a book to a user.

    A row with a null return_date is an active borrow. Returning sets
    return_date, and a later borrow of the same book by the same user
    creates a new row.
    """

    __tablename__ = "book_borrows"
    __table_args__ = (UniqueConstraint("user_id", "book_id", "return_date", name="unique_borrow"),)
    __mapper_args__ = {"eager_defaults": True}

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    book_id: Mapped[int] = mapped_column(ForeignKey("books.id"), nullable=False, index=True)
    borrow_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        init=False,
    )
    return_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), default=None)
