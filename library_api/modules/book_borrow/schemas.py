"""Pydantic schemas for the borrow workflow."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field


class BookBorrowRequest(BaseModel):
    """Schema identifying the book and user of a borrow or return.

    Ids must be JSON integers, not numeric strings or floats.
    """

    book_id: Annotated[int, Field(gt=0, strict=True, description="ID of the book")]
    user_id: Annotated[int, Field(gt=0, strict=True, description="ID of the user")]


class BookBorrowRead(BaseModel):
    """Schema for reading a borrow record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    book_id: int
    user_id: int
    borrow_date: datetime
    return_date: Optional[datetime] = None
