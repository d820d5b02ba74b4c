import uuid
from backend.entity.user_interests_entity import UserInterestsEntity
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


class UserInterestsRepository:
    """
    Repository for handling database operations related to UserInterestsEntity.
    """

    async def get_by_user_id(
        self, session: AsyncSession, user_id: uuid.UUID
    ) -> UserInterestsEntity | None:
        """
        Retrieve the interest snapshot of a user.

        Args:
            session (AsyncSession): The active async database session.
            user_id (uuid.UUID): The user whose interests are retrieved.

        Returns:
            UserInterestsEntity | None: The interests row, or None if the user has none.
        """
        result = await session.execute(
            select(UserInterestsEntity).where(UserInterestsEntity.user_id == user_id)
        )

        return result.scalars().one_or_none()
