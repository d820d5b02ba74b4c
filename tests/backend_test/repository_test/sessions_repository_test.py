import unittest
import uuid
from datetime import datetime, timedelta, timezone
from backend.common.mentorship_enums import SessionStatus
from backend.entity.mentors_entity import MentorsEntity
from backend.entity.sessions_entity import SessionsEntity
from backend.repository.sessions_repository import SessionsRepository
from tests.backend_test.repository_test.base_repository_test_lib import (
    BaseRepositoryTestLib,
)


class TestSessionsRepository(BaseRepositoryTestLib):
    async def asyncSetUp(self):
        await super().asyncSetUp()

        self.repo = SessionsRepository()
        self.day = datetime(2026, 3, 2, tzinfo=timezone.utc)

        self.mentor = MentorsEntity(
            name="Ada Mentor",
            hourly_rate=120,
            availability={"monday": ["10:00", "14:00"]},
            timezone="UTC",
        )
        await self.insert_entities([self.mentor])

        self.sessions = [
            self._session(self.day + timedelta(hours=10), SessionStatus.SCHEDULED),
            self._session(self.day + timedelta(hours=14), SessionStatus.CANCELLED),
            self._session(self.day + timedelta(days=1, hours=10), SessionStatus.SCHEDULED),
        ]
        await self.insert_entities(self.sessions)

    def _session(self, start, status):
        return SessionsEntity(
            mentor_id=self.mentor.id,
            learner_id=uuid.uuid4(),
            mentor_name=self.mentor.name,
            learner_name="Lee Learner",
            date=start,
            duration_minutes=60,
            topic="System design",
            price=120,
            status=status,
            created_at=self.day,
            updated_at=self.day,
        )

    async def test_get_by_id(self):
        result = await self.repo.get_by_id(self.session, self.sessions[0].id)

        self.assertIsNotNone(result)
        self.assertEqual(result.topic, "System design")

    async def test_get_by_id_missing(self):
        self.assertIsNone(await self.repo.get_by_id(self.session, uuid.uuid4()))
        self.assertIsNone(await self.repo.get_by_id(self.session, None))

    async def test_get_mentor_sessions_between_filters_status_and_window(self):
        """Only scheduled sessions starting inside [start, end) are returned."""
        result = await self.repo.get_mentor_sessions_between(
            self.session,
            mentor_id=self.mentor.id,
            start=self.day,
            end=self.day + timedelta(days=1),
        )

        self.assertEqual([s.id for s in result], [self.sessions[0].id])

    async def test_get_mentor_sessions_between_other_mentor(self):
        result = await self.repo.get_mentor_sessions_between(
            self.session,
            mentor_id=uuid.uuid4(),
            start=self.day,
            end=self.day + timedelta(days=2),
        )

        self.assertEqual(result, [])

    async def test_upsert_session_updates_existing(self):
        entity = self.sessions[0]
        entity.status = SessionStatus.IN_PROGRESS

        result = await self.repo.upsert_session(self.session, entity)
        reloaded = await self.repo.get_by_id(self.session, entity.id)

        self.assertEqual(result.id, entity.id)
        self.assertEqual(reloaded.status, SessionStatus.IN_PROGRESS)


if __name__ == "__main__":
    unittest.main()
