import uuid
from datetime import datetime
from backend.entity.reading_progress_entity import ReadingProgressEntity
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession


class ReadingProgressRepository:
    """
    Repository for handling database operations related to ReadingProgressEntity.
    """

    async def upsert_progress(
        self,
        session: AsyncSession,
        user_id: uuid.UUID,
        post_id: uuid.UUID,
        progress: int,
        completed: bool,
        last_read_at: datetime,
    ) -> ReadingProgressEntity:
        """
        Insert or update the reading progress of a user on a post.

        Conflicts on (user_id, post_id) update the existing row in place.

        Args:
            session (AsyncSession): The active async database session.
            user_id (uuid.UUID): The reader.
            post_id (uuid.UUID): The post being read.
            progress (int): Percentage read, 0 to 100.
            completed (bool): Whether the post was read to the end.
            last_read_at (datetime): Timestamp of this reading update.

        Returns:
            ReadingProgressEntity: The stored row.
        """
        values = {
            "user_id": user_id,
            "post_id": post_id,
            "progress": progress,
            "completed": completed,
            "last_read_at": last_read_at,
        }
        statement = (
            insert(ReadingProgressEntity)
            .values(id=uuid.uuid4(), **values)
            .on_conflict_do_update(
                index_elements=[
                    ReadingProgressEntity.user_id,
                    ReadingProgressEntity.post_id,
                ],
                set_={
                    "progress": progress,
                    "completed": completed,
                    "last_read_at": last_read_at,
                },
            )
            .returning(ReadingProgressEntity)
        )

        result = await session.execute(
            statement, execution_options={"populate_existing": True}
        )

        return result.scalars().one()
