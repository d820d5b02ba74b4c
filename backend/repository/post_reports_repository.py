import uuid
from datetime import datetime
from backend.entity.community_posts_entity import CommunityPostsEntity
from backend.entity.post_reports_entity import PostReportsEntity
from backend.entity.profiles_entity import ProfilesEntity
from backend.common.community_enums import ReportStatus
from sqlalchemy import func, select, update
from sqlalchemy.orm import aliased
from sqlalchemy.ext.asyncio import AsyncSession


class PostReportsRepository:
    """
    Repository for handling database operations related to PostReportsEntity.
    """

    async def get_by_post_and_reporter(
        self, session: AsyncSession, post_id: uuid.UUID, reporter_id: uuid.UUID
    ) -> PostReportsEntity | None:
        """
        Retrieve the report a user already filed against a post, if any.

        Args:
            session (AsyncSession): The active async database session.
            post_id (uuid.UUID): The reported post.
            reporter_id (uuid.UUID): The reporting user.

        Returns:
            PostReportsEntity | None: The existing report, or None.
        """
        result = await session.execute(
            select(PostReportsEntity).where(
                PostReportsEntity.post_id == post_id,
                PostReportsEntity.reporter_id == reporter_id,
            )
        )

        return result.scalars().first()

    async def insert_report(
        self, session: AsyncSession, entity: PostReportsEntity
    ) -> PostReportsEntity:
        """
        Insert a new post report.

        Args:
            session (AsyncSession): The active async database session.
            entity (PostReportsEntity): The report to insert.

        Returns:
            PostReportsEntity: The flushed entity.
        """
        session.add(entity)
        await session.flush()

        return entity

    async def resolve_reports_for_post(
        self,
        session: AsyncSession,
        post_id: uuid.UUID,
        status: ReportStatus,
        resolved_by: uuid.UUID,
        resolved_at: datetime,
    ) -> int:
        """
        Mark every report of a post as resolved with the moderation outcome.

        Args:
            session (AsyncSession): The active async database session.
            post_id (uuid.UUID): The moderated post.
            status (ReportStatus): The outcome recorded on each report.
            resolved_by (uuid.UUID): The moderator.
            resolved_at (datetime): When the decision was taken.

        Returns:
            int: Number of reports updated.
        """
        result = await session.execute(
            update(PostReportsEntity)
            .where(PostReportsEntity.post_id == post_id)
            .values(status=status, resolved_at=resolved_at, resolved_by=resolved_by)
        )

        return result.rowcount

    async def get_pending_reports_with_posts(
        self, session: AsyncSession
    ) -> list[tuple[PostReportsEntity, CommunityPostsEntity, str | None, str | None]]:
        """
        Retrieve pending reports, newest first, together with the reported post.

        Args:
            session (AsyncSession): The active async database session.

        Returns:
            list[tuple]: (report, post, author full name, reporter full name) rows.
            A name is None when the profile does not exist.
        """
        author = aliased(ProfilesEntity)
        reporter = aliased(ProfilesEntity)

        result = await session.execute(
            select(
                PostReportsEntity,
                CommunityPostsEntity,
                author.full_name,
                reporter.full_name,
            )
            .join(
                CommunityPostsEntity,
                CommunityPostsEntity.id == PostReportsEntity.post_id,
            )
            .outerjoin(author, author.id == CommunityPostsEntity.user_id)
            .outerjoin(reporter, reporter.id == PostReportsEntity.reporter_id)
            .where(PostReportsEntity.status == ReportStatus.PENDING)
            .order_by(PostReportsEntity.created_at.desc())
        )

        return [tuple(row) for row in result.all()]

    async def count_by_status(self, session: AsyncSession) -> dict[ReportStatus, int]:
        """
        Count reports per status.

        Returns:
            dict[ReportStatus, int]: Every status mapped to its count, 0 when absent.
        """
        result = await session.execute(
            select(PostReportsEntity.status, func.count()).group_by(
                PostReportsEntity.status
            )
        )
        counts = dict.fromkeys(ReportStatus, 0)
        counts.update({status: count for status, count in result.all()})
        return counts
