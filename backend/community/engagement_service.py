from sqlalchemy.ext.asyncio import AsyncSession
from backend.dto.engagement_create_dto import (
    EngagementCreateDto,
    ReadingProgressCreateDto,
)
from backend.dto.engagement_dto import EngagementDto, ReadingProgressDto
from backend.dto.user_context_dto import UserContextDto
from backend.entity.user_engagement_entity import UserEngagementEntity


class EngagementService:
    def __init__(
        self,
        logger,
        user_engagement_repository,
        reading_progress_repository,
        community_mapper,
        date_time_util,
    ):
        """
        Initializes the EngagementService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            user_engagement_repository (UserEngagementRepository): Engagement log.
            reading_progress_repository (ReadingProgressRepository): Reading progress store.
            community_mapper (CommunityMapper): Converts entities to DTOs.
            date_time_util (DateTimeUtil): Clock helper.
        """
        self.logger = logger
        self.user_engagement_repository = user_engagement_repository
        self.reading_progress_repository = reading_progress_repository
        self.community_mapper = community_mapper
        self.date_time_util = date_time_util

    async def track_engagement(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        engagement: EngagementCreateDto,
    ) -> EngagementDto:
        """
        Append an engagement event for the user with a server-side timestamp.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The authenticated user.
            engagement (EngagementCreateDto): Post, action and optional metadata.

        Returns:
            EngagementDto: The stored event.
        """
        entity = UserEngagementEntity(
            user_id=user_context.user_id,
            post_id=engagement.post_id,
            action=engagement.action,
            event_metadata=engagement.metadata,
            timestamp=self.date_time_util.now_utc(),
        )

        created = await self.user_engagement_repository.insert_engagement(
            session, entity
        )
        await session.commit()

        self.logger.debug(
            "[EngagementService] %s %s post %s",
            user_context.sub,
            engagement.action,
            engagement.post_id,
        )
        return self.community_mapper.map_to_engagement_dto(created)

    async def update_reading_progress(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        reading_progress: ReadingProgressCreateDto,
    ) -> ReadingProgressDto:
        """
        Record how far the user has read a post. One row is kept per user and post.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The authenticated user.
            reading_progress (ReadingProgressCreateDto): Post, percentage and completion flag.

        Returns:
            ReadingProgressDto: The stored progress.
        """
        stored = await self.reading_progress_repository.upsert_progress(
            session,
            user_id=user_context.user_id,
            post_id=reading_progress.post_id,
            progress=reading_progress.progress,
            completed=reading_progress.completed,
            last_read_at=self.date_time_util.now_utc(),
        )
        dto = self.community_mapper.map_to_reading_progress_dto(stored)
        await session.commit()

        return dto
