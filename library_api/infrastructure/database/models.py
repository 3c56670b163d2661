from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, MappedAsDataclass, mapped_column


class IntegerIdMixin(MappedAsDataclass):
    """Mixin to add a store-generated integer primary key to database models.

    Every library table (users, books, book_borrows) is keyed by an
    autoincrementing integer that the database assigns on insert.

    Attributes:
        id: The integer primary key.

    Note:
        The field is excluded from dataclass initialization (init=False)
        so identifiers can never be supplied by callers; they are only
        available after the row has been flushed.

    Example:
        ```python
        class User(Base, IntegerIdMixin):
            __tablename__ = "users"

            first_name: Mapped[str] = mapped_column(String(100))

        user = User(first_name="Ada")
        session.add(user)
        await session.flush()
        user.id  # assigned by the database
        ```
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        init=False,
    )
