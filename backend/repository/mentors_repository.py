import uuid
from backend.entity.mentors_entity import MentorsEntity
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


class MentorsRepository:
    """
    Repository for handling database operations related to MentorsEntity.
    """

    async def get_by_id(
        self, session: AsyncSession, mentor_id: uuid.UUID
    ) -> MentorsEntity | None:
        """
        Retrieve a mentor by ID.

        Args:
            session (AsyncSession): The active async database session.
            mentor_id (uuid.UUID): The ID of the mentor to retrieve.

        Returns:
            MentorsEntity | None: The matching mentor if found; otherwise None.
        """
        if not mentor_id:
            return None

        result = await session.execute(
            select(MentorsEntity).where(MentorsEntity.id == mentor_id)
        )

        return result.scalars().one_or_none()
