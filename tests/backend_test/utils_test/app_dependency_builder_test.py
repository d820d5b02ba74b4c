from unittest import TestCase, main
from unittest.mock import patch, MagicMock
from backend.utils.app_dependency_builder import AppDependencyBuilder
from backend.utils.fast_app_factory import FastAppFactory


@patch("backend.utils.app_dependency_builder.Database")
@patch("backend.utils.app_dependency_builder.get_logger")
class TestAppDependencyBuilder(TestCase):
    def test_dependencies_are_wired_correctly(self, mock_get_logger, mock_database_cls):
        """
        Tests that the AppDependencyBuilder correctly instantiates and wires all its dependencies.
        """
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger
        mock_database = MagicMock()
        mock_database_cls.return_value = mock_database

        builder = AppDependencyBuilder()

        self.assertIs(builder.logger, mock_logger)
        self.assertIs(builder.database, mock_database)

        # Services share repositories and helpers
        self.assertIs(
            builder.booking_service.sessions_repository, builder.sessions_repository
        )
        self.assertIs(
            builder.session_lifecycle_service.sessions_repository,
            builder.sessions_repository,
        )
        self.assertIs(
            builder.session_lifecycle_service.audit_log_service,
            builder.audit_log_service,
        )
        self.assertIs(
            builder.moderation_service.audit_log_service, builder.audit_log_service
        )
        self.assertIs(
            builder.feed_service.personalization_scorer,
            builder.personalization_scorer,
        )
        self.assertIs(
            builder.feed_service.trending_scorer,
            builder.community_analytics_service.trending_scorer,
        )
        self.assertIs(
            builder.community_analytics_service.community_posts_repository,
            builder.community_posts_repository,
        )
        self.assertIs(
            builder.feed_service.community_posts_repository,
            builder.moderation_service.community_posts_repository,
        )

        # Controllers receive their services and the database
        self.assertIs(
            builder.mentorship_controller.booking_service, builder.booking_service
        )
        self.assertIs(builder.mentorship_controller.database, mock_database)
        self.assertIs(builder.community_controller.feed_service, builder.feed_service)
        self.assertIs(
            builder.community_controller.community_analytics_service,
            builder.community_analytics_service,
        )
        self.assertIs(
            builder.moderation_controller.moderation_service,
            builder.moderation_service,
        )
        self.assertIs(
            builder.authentication_controller.identity_service,
            builder.identity_service,
        )

        # Factory receives the controllers and the authentication service
        self.assertIsInstance(builder.fast_app_factory, FastAppFactory)
        self.assertIs(
            builder.fast_app_factory.authentication_service,
            builder.authentication_service,
        )
        self.assertIs(
            builder.fast_app_factory.community_controller,
            builder.community_controller,
        )


if __name__ == "__main__":
    main()
