"""Pydantic schemas shared by the domain modules."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Acknowledgement returned by write endpoints."""

    message: str = Field(description="Human readable outcome of the operation")
