"""SQLAlchemy models for user entities."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import IntegerIdMixin
from ...infrastructure.database.session import Base


class User(Base, IntegerIdMixin):
    """A library member who can borrow books.

    The first and last name pair is unique across users; the service layer
    enforces it before every insert and update.
    """

    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
