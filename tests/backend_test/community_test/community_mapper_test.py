import uuid
import unittest
from datetime import datetime, timezone
from backend.community.community_mapper import CommunityMapper
from backend.dto.post_dto import PostDto, ScoredPostDto
from backend.entity.community_posts_entity import CommunityPostsEntity
from backend.entity.reading_progress_entity import ReadingProgressEntity
from backend.entity.user_engagement_entity import UserEngagementEntity
from backend.common.community_enums import PostStatus


class TestCommunityMapper(unittest.TestCase):
    def setUp(self):
        self.mapper = CommunityMapper()
        self.now = datetime.now(timezone.utc)
        self.post = CommunityPostsEntity(
            id=uuid.uuid4(),
            user_id=uuid.uuid4(),
            title="Hello",
            content="World",
            post_type="article",
            tags=None,
            likes_count=None,
            comments_count=3,
            status=PostStatus.PUBLISHED,
            created_at=self.now,
        )

    def test_map_to_post_dto_defaults(self):
        """Test missing tags and likes map to empty and zero."""
        dto = self.mapper.map_to_post_dto(self.post)

        self.assertIsInstance(dto, PostDto)
        self.assertEqual(dto.tags, [])
        self.assertEqual(dto.likes_count, 0)
        self.assertEqual(dto.comments_count, 3)

    def test_map_to_scored_post_dto(self):
        """Test the scored DTO carries the score and the engagement count."""
        self.post.likes_count = 7

        dto = self.mapper.map_to_scored_post_dto(self.post, 10.5)

        self.assertIsInstance(dto, ScoredPostDto)
        self.assertEqual(dto.personalization_score, 10.5)
        self.assertEqual(dto.engagement_count, 7)
        dumped = dto.model_dump(by_alias=True)
        self.assertIn("personalizationScore", dumped)
        self.assertIn("likesCount", dumped)

    def test_map_to_engagement_dto(self):
        """Test the stored metadata column maps to the metadata field."""
        entity = UserEngagementEntity(
            id=uuid.uuid4(),
            user_id=uuid.uuid4(),
            post_id=uuid.uuid4(),
            action="share",
            event_metadata={"channel": "email"},
            timestamp=self.now,
        )

        dto = self.mapper.map_to_engagement_dto(entity)

        self.assertEqual(dto.metadata, {"channel": "email"})
        self.assertEqual(dto.action, "share")

    def test_map_to_reading_progress_dto(self):
        """Test reading progress maps from ORM attributes."""
        entity = ReadingProgressEntity(
            id=uuid.uuid4(),
            user_id=uuid.uuid4(),
            post_id=uuid.uuid4(),
            progress=40,
            completed=False,
            last_read_at=self.now,
        )

        dto = self.mapper.map_to_reading_progress_dto(entity)

        self.assertEqual(dto.progress, 40)
        self.assertFalse(dto.completed)


    def test_map_to_trending_post_dto_serializes_metrics(self):
        """Test trending posts serialize their score and metrics in camelCase."""
        dto = self.mapper.map_to_trending_post_dto(
            self.post, trending_score=18.0, total_engagement=9
        )

        body = dto.model_dump(by_alias=True)
        self.assertEqual(body["trendingScore"], 18.0)
        self.assertEqual(
            body["engagementMetrics"],
            {"likes": 0, "comments": 3, "totalEngagement": 9},
        )

    def test_map_to_search_result_dto(self):
        dto = self.mapper.map_to_search_result_dto(self.post, 2.5)

        self.assertEqual(dto.id, self.post.id)
        self.assertEqual(dto.relevance_score, 2.5)


if __name__ == "__main__":
    unittest.main()
