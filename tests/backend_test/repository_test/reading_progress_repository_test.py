import unittest
import uuid
from datetime import datetime, timedelta, timezone
from backend.entity.community_posts_entity import CommunityPostsEntity
from backend.repository.reading_progress_repository import ReadingProgressRepository
from tests.backend_test.repository_test.base_repository_test_lib import (
    BaseRepositoryTestLib,
)


class TestReadingProgressRepository(BaseRepositoryTestLib):
    async def asyncSetUp(self):
        await super().asyncSetUp()

        self.repo = ReadingProgressRepository()
        self.now = datetime.now(timezone.utc)
        self.user_id = uuid.uuid4()

        self.post = CommunityPostsEntity(
            user_id=uuid.uuid4(), title="Long read", content="...", tags=[]
        )
        await self.insert_entities([self.post])

    async def test_upsert_progress_insert(self):
        result = await self.repo.upsert_progress(
            self.session,
            user_id=self.user_id,
            post_id=self.post.id,
            progress=30,
            completed=False,
            last_read_at=self.now,
        )

        self.assertIsNotNone(result.id)
        self.assertEqual(result.progress, 30)
        self.assertFalse(result.completed)

    async def test_upsert_progress_updates_same_row(self):
        first = await self.repo.upsert_progress(
            self.session,
            user_id=self.user_id,
            post_id=self.post.id,
            progress=30,
            completed=False,
            last_read_at=self.now,
        )

        second = await self.repo.upsert_progress(
            self.session,
            user_id=self.user_id,
            post_id=self.post.id,
            progress=100,
            completed=True,
            last_read_at=self.now + timedelta(minutes=5),
        )

        self.assertEqual(second.id, first.id)
        self.assertEqual(second.progress, 100)
        self.assertTrue(second.completed)


if __name__ == "__main__":
    unittest.main()
