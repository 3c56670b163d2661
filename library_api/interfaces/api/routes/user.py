"""User API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ....modules.common.schemas import MessageResponse
from ....modules.common.utils.error_handler import handle_exception
from ....modules.user.schemas import UserCreate, UserRead, UserUpdate
from ....modules.user.services import UserService
from ..dependencies import DbSession, get_user_service

router = APIRouter(tags=["Users"])


@router.post(
    "/user",
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="""
    Registers a new library user.

    - **first_name**: User first name (required, non-empty)
    - **last_name**: User last name (required, non-empty)

    The pair of first and last name must be unique across users.
    """,
    responses={
        201: {"description": "User created successfully"},
        400: {"description": "Invalid user data"},
        409: {"description": "A user with this first and last name already exists"},
    },
)
async def create_user(
    user_data: UserCreate,
    db: DbSession,
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Create a new user."""
    try:
        await user_service.create_user(user_data, db)
        return MessageResponse(message="User was successfully created")
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.get(
    "/user/{user_id}",
    summary="Get User",
    description="Retrieves a single user by ID.",
    responses={
        200: {"description": "User details"},
        400: {"description": "User ID is not an integer"},
        404: {"description": "User not found"},
    },
)
async def get_user(
    user_id: int,
    db: DbSession,
    user_service: UserService = Depends(get_user_service),
) -> UserRead:
    """Get a specific user by ID."""
    try:
        return await user_service.get_user(user_id, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.get(
    "/users",
    summary="List Users",
    description="Retrieves every user ordered by ID.",
    responses={
        200: {"description": "List of users"},
    },
)
async def get_users(
    db: DbSession,
    user_service: UserService = Depends(get_user_service),
) -> List[UserRead]:
    """Get all users."""
    try:
        return await user_service.get_users(db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.put(
    "/user/{user_id}",
    summary="Update User",
    description="""
    Replaces both names of an existing user.

    - **user_id**: ID of the user to update
    - **first_name**: New first name
    - **last_name**: New last name

    Submitting the user's current names again is allowed.
    """,
    responses={
        200: {"description": "User updated successfully"},
        400: {"description": "Invalid user data"},
        404: {"description": "User not found"},
        409: {"description": "Another user already has this first and last name"},
    },
)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    db: DbSession,
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Update a user."""
    try:
        await user_service.update_user(user_data, user_id, db)
        return MessageResponse(message="User was updated successfully")
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.delete(
    "/user/{user_id}",
    summary="Delete User",
    description="""
    Deletes a user.

    A user that still has borrow records, returned or not, cannot be deleted.
    """,
    responses={
        200: {"description": "User deleted successfully"},
        400: {"description": "User ID is not an integer"},
        404: {"description": "User not found"},
        409: {"description": "User has borrow records"},
    },
)
async def delete_user(
    user_id: int,
    db: DbSession,
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Delete a user."""
    try:
        await user_service.delete_user(user_id, db)
        return MessageResponse(message="User was successfully deleted")
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
