"""User management service."""

from typing import Any, List, cast

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.logging import get_logger
from ..common.constants import USER_SERVICE
from ..common.exceptions import ResourceInUseError, UserExistsError, UserNotFoundError
from ..common.utils.operations import service_operation
from .crud import user_crud
from .schemas import UserBase, UserCreate, UserRead, UserUpdate

logger = get_logger(__name__)


class UserService:
    """Service for managing library users.

    Users are identified by a store-generated id; the pair of first and
    last name must be unique. Every mutation checks that the user exists
    first, and the check is exposed as user_exists() for the borrow
    workflow.
    """

    @service_operation(f"{USER_SERVICE} - CreateUser")
    async def create_user(
        self,
        user_data: UserCreate,
        db: AsyncSession,
    ) -> UserRead:
        """Create a new user.

        Args:
            user_data: User creation data
            db: Database session

        Returns:
            The stored user

        Raises:
            UserExistsError: A user with the same first and last name exists
        """
        await self._ensure_name_available(user_data, db)

        created_user = cast(Any, await user_crud.create(db=db, object=user_data))
        logger.info("User created", extra={"user_id": created_user.id})

        return UserRead.model_validate(created_user)

    @service_operation(f"{USER_SERVICE} - GetUser")
    async def get_user(
        self,
        user_id: int,
        db: AsyncSession,
    ) -> UserRead:
        """Get a specific user.

        Raises:
            UserNotFoundError: No user has this id
        """
        user = await user_crud.get(db=db, schema_to_select=UserRead, return_as_model=True, id=user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return cast(UserRead, user)

    @service_operation(f"{USER_SERVICE} - GetAllUsers")
    async def get_users(self, db: AsyncSession) -> List[UserRead]:
        """Get all users in id order."""
        stmt = await user_crud.select(schema_to_select=UserRead, sort_columns="id")
        result = await db.execute(stmt)
        return [UserRead.model_validate(row) for row in result.mappings().all()]

    @service_operation(f"{USER_SERVICE} - UpdateUser")
    async def update_user(
        self,
        user_data: UserUpdate,
        user_id: int,
        db: AsyncSession,
    ) -> UserRead:
        """Overwrite both names of an existing user.

        Args:
            user_data: The new first and last name
            user_id: User ID to update
            db: Database session

        Returns:
            The updated user

        Raises:
            UserNotFoundError: No user has this id
            UserExistsError: A different user already has the new name pair
        """
        await self.user_exists(user_id, db)
        await self._ensure_name_available(user_data, db, user_id=user_id)

        await user_crud.update(db=db, object=user_data, id=user_id)
        logger.info("User updated", extra={"user_id": user_id})

        return await self.get_user(user_id, db)

    @service_operation(f"{USER_SERVICE} - DeleteUser")
    async def delete_user(
        self,
        user_id: int,
        db: AsyncSession,
    ) -> None:
        """Delete a user.

        Raises:
            UserNotFoundError: No user has this id
            ResourceInUseError: Borrow records still reference the user
        """
        await self.user_exists(user_id, db)

        try:
            await user_crud.db_delete(db=db, id=user_id)
        except IntegrityError as e:
            await db.rollback()
            raise ResourceInUseError(f"User with id {user_id} has borrow records and cannot be deleted") from e

        logger.info("User deleted", extra={"user_id": user_id})

    @service_operation(f"{USER_SERVICE} - userExist")
    async def user_exists(self, user_id: int, db: AsyncSession) -> None:
        """Check that a user exists.

        Raises:
            UserNotFoundError: No user has this id
        """
        if not await user_crud.exists(db=db, id=user_id):
            raise UserNotFoundError(user_id)

    @service_operation(f"{USER_SERVICE} - NameAndLastNameExist")
    async def _ensure_name_available(
        self,
        user_data: UserBase,
        db: AsyncSession,
        user_id: int | None = None,
    ) -> None:
        """Reject a first and last name pair already used by another user.

        When user_id is given, that user's own current names do not count
        as a collision.
        """
        existing = await user_crud.get(
            db=db,
            schema_to_select=UserRead,
            return_as_model=True,
            first_name=user_data.first_name,
            last_name=user_data.last_name,
        )
        if existing is not None and cast(UserRead, existing).id != user_id:
            raise UserExistsError(user_data.first_name, user_data.last_name)
