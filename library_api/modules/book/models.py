"""SQLAlchemy models for book entities."""

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import IntegerIdMixin
from ...infrastructure.database.session import Base


class Book(Base, IntegerIdMixin):
    """A title held by the library and the number of copies on the shelf.

    quantity counts copies currently available; borrowing decrements it and
    returning increments it. The check constraint keeps it from going
    negative even if a write slips past the service layer.
    """

    __tablename__ = "books"
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_books_quantity_non_negative"),)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
