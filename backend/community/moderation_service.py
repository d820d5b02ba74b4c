import uuid
from sqlalchemy.ext.asyncio import AsyncSession
from backend.common.community_enums import (
    MODERATED_POST_STATUSES,
    MODERATION_ACTION_TO_STATUS,
    PostStatus,
    ReportStatus,
)
from backend.common.constants import (
    AUDIT_POST_ACTION_TEMPLATE,
    COMMUNITY_POSTS_TABLE,
)
from backend.common.service_errors import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from backend.common.user_role import UserRole
from backend.dto.moderation_dto import (
    ModerationRequestDto,
    ModerationStatsDto,
    PostReportCreateDto,
    PostReportDto,
    ReportedPostDto,
)
from backend.dto.post_dto import PostDto
from backend.dto.user_context_dto import UserContextDto
from backend.entity.post_reports_entity import PostReportsEntity


class ModerationService:
    """
    Service for reporting community posts, moderating them and reviewing
    the report queue.

    Moderation and report review require the caller's profile role to be
    at least moderator.
    Roles are read from the profile table on every call, never from the token.
    """

    def __init__(
        self,
        logger,
        community_posts_repository,
        post_reports_repository,
        profiles_repository,
        community_mapper,
        audit_log_service,
        date_time_util,
    ):
        """
        Initializes the ModerationService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            community_posts_repository (CommunityPostsRepository): Access to posts.
            post_reports_repository (PostReportsRepository): Access to reports.
            profiles_repository (ProfilesRepository): Access to caller roles.
            community_mapper (CommunityMapper): Converts entities to DTOs.
            audit_log_service (AuditLogService): Best-effort audit writer.
            date_time_util (DateTimeUtil): Clock helper.
        """
        self.logger = logger
        self.community_posts_repository = community_posts_repository
        self.post_reports_repository = post_reports_repository
        self.profiles_repository = profiles_repository
        self.community_mapper = community_mapper
        self.audit_log_service = audit_log_service
        self.date_time_util = date_time_util

    async def _require_moderator(
        self, session: AsyncSession, user_context: UserContextDto, attempted: str
    ):
        profile = await self.profiles_repository.get_by_id(
            session, user_context.user_id
        )
        role = UserRole.from_value(profile.role if profile else None)
        if not role.has_at_least(UserRole.MODERATOR):
            self.logger.warning(
                "[ModerationService] %s with role %s attempted to %s",
                user_context.sub,
                role.value,
                attempted,
            )
            raise ForbiddenError("Insufficient permissions")

    async def report_post(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        post_id: uuid.UUID,
        report: PostReportCreateDto,
    ) -> PostReportDto:
        """
        File a report against a post. A user may report a given post only once.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The reporting user.
            post_id (uuid.UUID): The reported post.
            report (PostReportCreateDto): Reason and optional details.

        Returns:
            PostReportDto: The pending report.

        Raises:
            NotFoundError: If the post does not exist.
            InvalidInputError: If the user already reported the post.
        """
        post = await self.community_posts_repository.get_by_id(session, post_id)
        if not post:
            raise NotFoundError("Post not found")

        reporter_id = user_context.user_id
        existing = await self.post_reports_repository.get_by_post_and_reporter(
            session, post_id=post.id, reporter_id=reporter_id
        )
        if existing:
            raise InvalidInputError("You have already reported this post")

        entity = PostReportsEntity(
            post_id=post.id,
            reporter_id=reporter_id,
            reason=report.reason,
            details=report.details,
            status=ReportStatus.PENDING,
            created_at=self.date_time_util.now_utc(),
        )
        created = await self.post_reports_repository.insert_report(session, entity)
        dto = self.community_mapper.map_to_post_report_dto(created)
        await session.commit()

        self.logger.info(
            "[ModerationService] post %s reported by %s", post.id, user_context.sub
        )
        return dto

    async def moderate_post(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        post_id: uuid.UUID,
        request: ModerationRequestDto,
    ) -> PostDto:
        """
        Approve, hide or delete a post and resolve its reports.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The moderator.
            post_id (uuid.UUID): The moderated post.
            request (ModerationRequestDto): The action and optional reason.

        Returns:
            PostDto: The post with its new status.

        Raises:
            ForbiddenError: If the caller's role is below moderator.
            NotFoundError: If the post does not exist.
        """
        moderator_id = user_context.user_id
        await self._require_moderator(
            session, user_context, attempted=f"moderate post {post_id}"
        )

        post = await self.community_posts_repository.get_by_id(session, post_id)
        if not post:
            raise NotFoundError("Post not found")

        action = request.action
        now = self.date_time_util.now_utc()
        previous_status = post.status

        post.status = MODERATION_ACTION_TO_STATUS[action]
        post.moderated_by = moderator_id
        post.moderation_reason = request.reason
        post.moderation_action = action
        updated = await self.community_posts_repository.update_moderation(
            session, post, moderated_at=now
        )

        resolved = await self.post_reports_repository.resolve_reports_for_post(
            session,
            post_id=updated.id,
            status=ReportStatus(action.value),
            resolved_by=moderator_id,
            resolved_at=now,
        )

        await self.audit_log_service.record(
            session,
            user_id=moderator_id,
            action=AUDIT_POST_ACTION_TEMPLATE.format(action=action.name),
            table_name=COMMUNITY_POSTS_TABLE,
            record_id=updated.id,
            new_data={
                "from": previous_status.value,
                "to": updated.status.value,
                "reason": request.reason,
            },
        )
        dto = self.community_mapper.map_to_post_dto(updated)
        await session.commit()

        self.logger.info(
            "[ModerationService] post %s %s by %s, %s report(s) resolved",
            updated.id,
            updated.status.value,
            user_context.sub,
            resolved,
        )
        return dto

    async def get_reported_posts(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> list[ReportedPostDto]:
        """
        List pending reports, newest first, with the reported post and the
        author and reporter names.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The moderator.

        Returns:
            list[ReportedPostDto]: Pending reports awaiting a decision.

        Raises:
            ForbiddenError: If the caller's role is below moderator.
        """
        await self._require_moderator(
            session, user_context, attempted="list reported posts"
        )

        rows = await self.post_reports_repository.get_pending_reports_with_posts(
            session
        )
        return [
            self.community_mapper.map_to_reported_post_dto(
                report, post, author_name, reporter_name
            )
            for report, post, author_name, reporter_name in rows
        ]

    async def get_moderation_stats(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> ModerationStatsDto:
        """
        Report and moderation totals.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The moderator.

        Returns:
            ModerationStatsDto: Report totals split by pending and resolved,
            and the number of hidden and deleted posts.

        Raises:
            ForbiddenError: If the caller's role is below moderator.
        """
        await self._require_moderator(
            session, user_context, attempted="read moderation stats"
        )

        reports = await self.post_reports_repository.count_by_status(session)
        posts = await self.community_posts_repository.count_by_status(
            session, MODERATED_POST_STATUSES
        )

        total = sum(reports.values())
        pending = reports.get(ReportStatus.PENDING, 0)
        return ModerationStatsDto(
            total_reports=total,
            pending_reports=pending,
            resolved_reports=total - pending,
            hidden_posts=posts.get(PostStatus.HIDDEN, 0),
            deleted_posts=posts.get(PostStatus.DELETED, 0),
        )
