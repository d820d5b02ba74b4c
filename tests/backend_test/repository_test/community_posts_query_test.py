import uuid
import unittest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.dialects import postgresql
from backend.repository.community_posts_repository import CommunityPostsRepository
from backend.entity.community_posts_entity import CommunityPostsEntity
from backend.entity.post_reports_entity import PostReportsEntity
from backend.common.community_enums import (
    ModerationAction,
    PostStatus,
    ReportStatus,
    SearchSortBy,
)


def compile_sql(statement) -> str:
    return str(
        statement.compile(
            dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}
        )
    )


class TestCommunityPostsQueries(unittest.IsolatedAsyncioTestCase):
    """
    Statement-level checks of the post queries, compiled for PostgreSQL
    without a database connection.
    """

    async def asyncSetUp(self):
        self.repo = CommunityPostsRepository()
        self.session = AsyncMock()
        self.session.execute.return_value = MagicMock()

    def executed_sql(self) -> str:
        statement = self.session.execute.await_args.args[0]
        return compile_sql(statement)

    async def test_feed_candidates_exclude_own_and_moderated_posts(self):
        user_id = uuid.uuid4()

        await self.repo.get_feed_candidates(
            self.session, user_id=user_id, interest_tags=[], offset=40, limit=20
        )

        sql = self.executed_sql()
        self.assertIn("community_posts.user_id != ", sql)
        self.assertIn(str(user_id), sql)
        self.assertIn("community_posts.status NOT IN ('hidden', 'deleted')", sql)
        self.assertNotIn("'HIDDEN'", sql)
        self.assertIn("ORDER BY community_posts.created_at DESC", sql)
        self.assertIn("LIMIT 20 OFFSET 40", sql)

    async def test_similar_posts_exclude_anchor_and_moderated_posts(self):
        anchor = CommunityPostsEntity(id=uuid.uuid4(), post_type="question", tags=None)

        await self.repo.get_similar_posts(self.session, anchor=anchor, limit=10)

        sql = self.executed_sql()
        self.assertIn("community_posts.id != ", sql)
        self.assertIn(str(anchor.id), sql)
        self.assertIn("community_posts.status NOT IN ('hidden', 'deleted')", sql)
        self.assertIn("community_posts.post_type = 'question'", sql)

    async def test_search_escapes_like_wildcards(self):
        """Test % and _ in the search text are matched literally."""
        await self.repo.search_posts(
            self.session,
            query_text="50%_off",
            tags=None,
            post_type=None,
            sort_by=SearchSortBy.NEWEST,
            offset=0,
            limit=20,
        )

        sql = self.executed_sql()
        self.assertIn("ESCAPE '/'", sql)
        self.assertIn("/_off", sql)
        self.assertNotIn("50%_off", sql)
        self.assertIn("community_posts.status NOT IN ('hidden', 'deleted')", sql)

    async def test_search_author_matches_escaped_full_name(self):
        await self.repo.search_posts(
            self.session,
            query_text=None,
            tags=None,
            post_type=None,
            sort_by=SearchSortBy.MOST_COMMENTED,
            offset=0,
            limit=20,
            author="a_b",
        )

        sql = self.executed_sql()
        self.assertIn("community_posts.user_id IN (SELECT profiles.id", sql)
        self.assertIn("lower(profiles.full_name) LIKE", sql)
        self.assertIn("a/_b", sql)
        self.assertIn("ORDER BY community_posts.comments_count DESC", sql)

    async def test_filter_posts_applies_min_likes_and_exact_author(self):
        await self.repo.filter_posts(
            self.session,
            tags=None,
            post_type=None,
            author="Ada Lovelace",
            created_since=None,
            min_likes=20,
            offset=0,
            limit=10,
        )

        sql = self.executed_sql()
        self.assertIn("profiles.full_name = 'Ada Lovelace'", sql)
        self.assertIn("community_posts.likes_count >= 20", sql)
        self.assertIn("community_posts.status NOT IN ('hidden', 'deleted')", sql)
        self.assertIn("ORDER BY community_posts.created_at DESC", sql)


class TestEnumColumnStorage(unittest.TestCase):
    """Enum columns store the lowercase values, never the member names."""

    def setUp(self):
        self.dialect = postgresql.dialect()

    def bind(self, column, value):
        return column.type.bind_processor(self.dialect)(value)

    def result(self, column, value):
        return column.type.result_processor(self.dialect, None)(value)

    def test_post_status_values(self):
        column = CommunityPostsEntity.__table__.c.status

        self.assertEqual(
            column.type.enums, ["published", "approved", "hidden", "deleted"]
        )
        self.assertEqual(self.bind(column, PostStatus.HIDDEN), "hidden")
        self.assertEqual(self.result(column, "deleted"), PostStatus.DELETED)

    def test_moderation_action_stores_resulting_status(self):
        column = CommunityPostsEntity.__table__.c.moderation_action

        self.assertEqual(column.type.enums, ["approved", "hidden", "deleted"])
        self.assertEqual(self.bind(column, ModerationAction.HIDE), "hidden")
        self.assertEqual(self.result(column, "approved"), ModerationAction.APPROVE)

    def test_report_status_values(self):
        column = PostReportsEntity.__table__.c.status

        self.assertEqual(column.type.enums, ["pending", "approve", "hide", "delete"])
        self.assertEqual(self.bind(column, ReportStatus.PENDING), "pending")


if __name__ == "__main__":
    unittest.main()
