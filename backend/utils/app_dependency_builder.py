from backend.common.logger import get_logger
from backend.common.database import Database
from backend.utils.date_time_util import DateTimeUtil
from backend.utils.fast_app_factory import FastAppFactory
from backend.authentication.authentication_controller import AuthenticationController
from backend.authentication.authentication_service import AuthenticationService
from backend.identity.identity_service import IdentityService
from backend.audit.audit_log_service import AuditLogService
from backend.repository.profiles_repository import ProfilesRepository
from backend.repository.mentors_repository import MentorsRepository
from backend.repository.sessions_repository import SessionsRepository
from backend.repository.community_posts_repository import CommunityPostsRepository
from backend.repository.user_engagement_repository import UserEngagementRepository
from backend.repository.user_interests_repository import UserInterestsRepository
from backend.repository.reading_progress_repository import ReadingProgressRepository
from backend.repository.post_reports_repository import PostReportsRepository
from backend.repository.audit_logs_repository import AuditLogsRepository
from backend.mentorship.mentorship_mapper import MentorshipMapper
from backend.mentorship.booking_service import BookingService
from backend.mentorship.session_lifecycle_service import SessionLifecycleService
from backend.mentorship.mentorship_controller import MentorshipController
from backend.community.community_mapper import CommunityMapper
from backend.community.personalization_scorer import PersonalizationScorer
from backend.community.trending_scorer import TrendingScorer
from backend.community.feed_service import FeedService
from backend.community.community_analytics_service import CommunityAnalyticsService
from backend.community.engagement_service import EngagementService
from backend.community.moderation_service import ModerationService
from backend.community.community_controller import CommunityController
from backend.community.moderation_controller import ModerationController


class AppDependencyBuilder:
    """
    A builder class responsible for constructing all service and controller dependencies
    used throughout the application.

    This class acts as a centralized place for wiring together core infrastructure such as:
    - Logging
    - Database engine and session factory
    - Repositories and mappers
    - Business services (e.g. BookingService, FeedService)
    - HTTP API controllers (e.g. MentorshipController, CommunityController)

    Example:
        builder = AppDependencyBuilder()
        app = builder.fast_app_factory.create_app()
    """

    def __init__(self):
        self.logger = get_logger()
        self.database = Database()
        self.date_time_util = DateTimeUtil(logger=self.logger)

        self.profiles_repository = ProfilesRepository()
        self.mentors_repository = MentorsRepository()
        self.sessions_repository = SessionsRepository()
        self.community_posts_repository = CommunityPostsRepository()
        self.user_engagement_repository = UserEngagementRepository()
        self.user_interests_repository = UserInterestsRepository()
        self.reading_progress_repository = ReadingProgressRepository()
        self.post_reports_repository = PostReportsRepository()
        self.audit_logs_repository = AuditLogsRepository()

        self.mentorship_mapper = MentorshipMapper()
        self.community_mapper = CommunityMapper()
        self.personalization_scorer = PersonalizationScorer()
        self.trending_scorer = TrendingScorer()

        self.audit_log_service = AuditLogService(
            logger=self.logger,
            audit_logs_repository=self.audit_logs_repository,
        )
        self.booking_service = BookingService(
            logger=self.logger,
            mentors_repository=self.mentors_repository,
            sessions_repository=self.sessions_repository,
            profiles_repository=self.profiles_repository,
            mentorship_mapper=self.mentorship_mapper,
            date_time_util=self.date_time_util,
        )
        self.session_lifecycle_service = SessionLifecycleService(
            logger=self.logger,
            sessions_repository=self.sessions_repository,
            mentorship_mapper=self.mentorship_mapper,
            audit_log_service=self.audit_log_service,
            date_time_util=self.date_time_util,
        )
        self.feed_service = FeedService(
            logger=self.logger,
            community_posts_repository=self.community_posts_repository,
            user_interests_repository=self.user_interests_repository,
            user_engagement_repository=self.user_engagement_repository,
            profiles_repository=self.profiles_repository,
            personalization_scorer=self.personalization_scorer,
            trending_scorer=self.trending_scorer,
            community_mapper=self.community_mapper,
            date_time_util=self.date_time_util,
        )
        self.community_analytics_service = CommunityAnalyticsService(
            logger=self.logger,
            community_posts_repository=self.community_posts_repository,
            profiles_repository=self.profiles_repository,
            user_engagement_repository=self.user_engagement_repository,
            trending_scorer=self.trending_scorer,
            community_mapper=self.community_mapper,
            date_time_util=self.date_time_util,
        )
        self.engagement_service = EngagementService(
            logger=self.logger,
            user_engagement_repository=self.user_engagement_repository,
            reading_progress_repository=self.reading_progress_repository,
            community_mapper=self.community_mapper,
            date_time_util=self.date_time_util,
        )
        self.moderation_service = ModerationService(
            logger=self.logger,
            community_posts_repository=self.community_posts_repository,
            post_reports_repository=self.post_reports_repository,
            profiles_repository=self.profiles_repository,
            community_mapper=self.community_mapper,
            audit_log_service=self.audit_log_service,
            date_time_util=self.date_time_util,
        )
        self.identity_service = IdentityService(
            logger=self.logger,
            profiles_repository=self.profiles_repository,
        )

        self.mentorship_controller = MentorshipController(
            booking_service=self.booking_service,
            session_lifecycle_service=self.session_lifecycle_service,
            database=self.database,
        )
        self.community_controller = CommunityController(
            feed_service=self.feed_service,
            engagement_service=self.engagement_service,
            community_analytics_service=self.community_analytics_service,
            database=self.database,
        )
        self.moderation_controller = ModerationController(
            moderation_service=self.moderation_service,
            database=self.database,
        )
        self.authentication_service = AuthenticationService(logger=self.logger)
        self.authentication_controller = AuthenticationController(
            identity_service=self.identity_service,
            database=self.database,
        )
        self.fast_app_factory = FastAppFactory(
            authentication_controller=self.authentication_controller,
            authentication_service=self.authentication_service,
            mentorship_controller=self.mentorship_controller,
            community_controller=self.community_controller,
            moderation_controller=self.moderation_controller,
        )
