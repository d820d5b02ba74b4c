import uuid
from datetime import datetime
from backend.entity.user_engagement_entity import UserEngagementEntity
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession


class UserEngagementRepository:
    """
    Repository for the append-only user engagement log.
    """

    async def insert_engagement(
        self, session: AsyncSession, entity: UserEngagementEntity
    ) -> UserEngagementEntity:
        """
        Append an engagement event.

        Args:
            session (AsyncSession): The active async database session.
            entity (UserEngagementEntity): The event to append.

        Returns:
            UserEngagementEntity: The flushed entity with generated keys.
        """
        session.add(entity)
        await session.flush()

        return entity

    async def get_recent_by_user_id(
        self,
        session: AsyncSession,
        user_id: uuid.UUID,
        since: datetime,
        limit: int,
    ) -> list[UserEngagementEntity]:
        """
        Retrieve a user's engagement events since a point in time, newest first.

        Args:
            session (AsyncSession): The active async database session.
            user_id (uuid.UUID): The user whose events are retrieved.
            since (datetime): Inclusive lower bound on the event timestamp.
            limit (int): Maximum number of events.

        Returns:
            list[UserEngagementEntity]: Matching events ordered by timestamp descending.
        """
        result = await session.execute(
            select(UserEngagementEntity)
            .where(
                UserEngagementEntity.user_id == user_id,
                UserEngagementEntity.timestamp >= since,
            )
            .order_by(UserEngagementEntity.timestamp.desc())
            .limit(limit)
        )

        return list(result.scalars().all())

    async def count_actions_by_user_id(
        self, session: AsyncSession, user_id: uuid.UUID, actions: list[str]
    ) -> dict[str, int]:
        """
        Count a user's engagement events per action.

        Args:
            session (AsyncSession): The active async database session.
            user_id (uuid.UUID): The acting user.
            actions (list[str]): Actions to count, such as "like" and "comment".

        Returns:
            dict[str, int]: Every requested action mapped to its count, 0 when absent.
        """
        result = await session.execute(
            select(UserEngagementEntity.action, func.count())
            .where(
                UserEngagementEntity.user_id == user_id,
                UserEngagementEntity.action.in_(actions),
            )
            .group_by(UserEngagementEntity.action)
        )
        counts = dict.fromkeys(actions, 0)
        counts.update({action: count for action, count in result.all()})
        return counts
