"""Pydantic schemas for user entities."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class UserBase(BaseModel):
    """Base schema for user data."""

    first_name: Annotated[str, Field(min_length=1, max_length=100, description="User first name")]
    last_name: Annotated[str, Field(min_length=1, max_length=100, description="User last name")]


class UserCreate(UserBase):
    """Schema for creating a new user."""

    pass


class UserUpdate(UserBase):
    """Schema for replacing both names of an existing user."""

    pass


class UserRead(UserBase):
    """Schema for reading user data."""

    model_config = ConfigDict(from_attributes=True)

    id: int
