import uuid
from backend.entity.profiles_entity import ProfilesEntity
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession


class ProfilesRepository:
    """
    Repository for handling database operations related to ProfilesEntity.
    """

    async def get_by_id(
        self, session: AsyncSession, profile_id: uuid.UUID
    ) -> ProfilesEntity | None:
        """
        Retrieve a profile by its ID, which is the authenticated user's ID.

        This method expects an externally managed AsyncSession, typically provided
        by the service layer within a transactional context.

        Args:
            session (AsyncSession): The active async database session.
            profile_id (uuid.UUID): The ID of the profile to retrieve.

        Returns:
            ProfilesEntity | None: The matching profile if found; otherwise None.
        """
        if not profile_id:
            return None

        result = await session.execute(
            select(ProfilesEntity).where(ProfilesEntity.id == profile_id)
        )

        return result.scalars().one_or_none()

    async def count_profiles(self, session: AsyncSession) -> int:
        result = await session.execute(select(func.count()).select_from(ProfilesEntity))
        return result.scalar_one()

    async def search_names(
        self, session: AsyncSession, query_text: str, limit: int
    ) -> list[str]:
        """
        Full names containing the text, case-insensitively.

        Args:
            session (AsyncSession): The active async database session.
            query_text (str): Literal substring to look for.
            limit (int): Maximum number of names.

        Returns:
            list[str]: Matching names in alphabetical order.
        """
        result = await session.execute(
            select(ProfilesEntity.full_name)
            .where(ProfilesEntity.full_name.icontains(query_text, autoescape=True))
            .order_by(ProfilesEntity.full_name)
            .limit(limit)
        )

        return list(result.scalars().all())
