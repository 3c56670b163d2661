"""Pydantic schemas for book entities."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class BookBase(BaseModel):
    """Base schema for book data.

    A quantity of 0 is treated as missing, so requests must carry at least
    one copy. Quantities must be JSON integers; "5" and 5.0 are rejected.
    """

    title: Annotated[str, Field(min_length=1, max_length=255, description="Book title, unique across books")]
    quantity: Annotated[int, Field(gt=0, strict=True, description="Number of copies available for borrowing")]


class BookCreate(BookBase):
    """Schema for creating a new book."""

    pass


class BookUpdate(BookBase):
    """Schema for replacing the title and quantity of an existing book."""

    pass


class BookRead(BaseModel):
    """Schema for reading book data."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    quantity: int
