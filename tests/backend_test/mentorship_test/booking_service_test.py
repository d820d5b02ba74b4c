import uuid
import unittest
from datetime import date, datetime, timezone
from unittest.mock import MagicMock, AsyncMock

from backend.mentorship.booking_service import BookingService, compute_session_price
from backend.utils.date_time_util import DateTimeUtil
from backend.dto.booking_create_dto import BookingCreateDto
from backend.dto.user_context_dto import UserContextDto
from backend.entity.mentors_entity import MentorsEntity
from backend.entity.profiles_entity import ProfilesEntity
from backend.entity.sessions_entity import SessionsEntity
from backend.common.mentorship_enums import SessionStatus
from backend.common.service_errors import (
    NotFoundError,
    SlotConflictError,
    SlotUnavailableError,
)

# 2024-01-15 is a Monday.
MONDAY_9AM_UTC = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)


class TestBookingService(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.mock_mentors_repo = MagicMock()
        self.mock_mentors_repo.get_by_id = AsyncMock()

        self.mock_sessions_repo = MagicMock()
        self.mock_sessions_repo.get_mentor_sessions_between = AsyncMock(
            return_value=[]
        )
        self.mock_sessions_repo.upsert_session = AsyncMock(
            side_effect=lambda session, entity: entity
        )

        self.mock_profiles_repo = MagicMock()
        self.mock_profiles_repo.get_by_id = AsyncMock(return_value=None)

        self.mock_mapper = MagicMock()
        self.mock_session = AsyncMock()
        self.logger = MagicMock()

        self.service = BookingService(
            logger=self.logger,
            mentors_repository=self.mock_mentors_repo,
            sessions_repository=self.mock_sessions_repo,
            profiles_repository=self.mock_profiles_repo,
            mentorship_mapper=self.mock_mapper,
            date_time_util=DateTimeUtil(logger=self.logger),
        )

        self.mentor = MentorsEntity(
            id=uuid.uuid4(),
            name="Grace",
            hourly_rate=120.0,
            availability={"monday": ["09:00", "14:00"], "friday": ["10:00"]},
            timezone="UTC",
        )
        self.mock_mentors_repo.get_by_id.return_value = self.mentor

        self.learner_id = uuid.uuid4()
        self.user_context = UserContextDto(
            sub=str(self.learner_id), primary_email="ada@example.com"
        )

    def _booking(self, when=MONDAY_9AM_UTC, duration=90):
        return BookingCreateDto.model_validate(
            {
                "mentorId": str(self.mentor.id),
                "date": when.isoformat(),
                "durationMinutes": duration,
                "topic": "System design",
            }
        )

    def _stored_session(self) -> SessionsEntity:
        return self.mock_sessions_repo.upsert_session.await_args.args[1]

    async def test_create_booking_success(self):
        """Test booking an available slot creates a scheduled, priced session."""
        result = await self.service.create_booking(
            self.mock_session, self.user_context, self._booking()
        )

        stored = self._stored_session()
        self.assertEqual(stored.status, SessionStatus.SCHEDULED)
        self.assertEqual(stored.price, 180.0)
        self.assertEqual(stored.mentor_id, self.mentor.id)
        self.assertEqual(stored.learner_id, self.learner_id)
        self.assertEqual(stored.mentor_name, "Grace")
        self.assertEqual(stored.duration_minutes, 90)
        self.assertIsNotNone(stored.created_at)

        self.mock_session.commit.assert_awaited_once()
        self.mock_mapper.map_to_session_dto.assert_called_once_with(stored)
        self.assertEqual(result, self.mock_mapper.map_to_session_dto.return_value)

    async def test_create_booking_mentor_not_found(self):
        """Test booking an unknown mentor raises NotFoundError."""
        self.mock_mentors_repo.get_by_id.return_value = None

        with self.assertRaises(NotFoundError):
            await self.service.create_booking(
                self.mock_session, self.user_context, self._booking()
            )

        self.mock_sessions_repo.upsert_session.assert_not_awaited()

    async def test_create_booking_slot_not_in_availability(self):
        """Test a start time missing from the weekday's slots is rejected."""
        ten_am = MONDAY_9AM_UTC.replace(hour=10)

        with self.assertRaises(SlotUnavailableError) as ctx:
            await self.service.create_booking(
                self.mock_session, self.user_context, self._booking(when=ten_am)
            )

        self.assertEqual(ctx.exception.message, "Time slot not available")
        self.mock_sessions_repo.get_mentor_sessions_between.assert_not_awaited()
        self.mock_session.commit.assert_not_awaited()

    async def test_create_booking_weekday_without_slots(self):
        """Test a weekday absent from the availability map is rejected."""
        tuesday = datetime(2024, 1, 16, 9, 0, tzinfo=timezone.utc)

        with self.assertRaises(SlotUnavailableError):
            await self.service.create_booking(
                self.mock_session, self.user_context, self._booking(when=tuesday)
            )

    async def test_create_booking_same_day_conflict(self):
        """Test any scheduled session on the same date blocks the booking."""
        self.mock_sessions_repo.get_mentor_sessions_between.return_value = [
            MagicMock(spec=SessionsEntity)
        ]
        two_pm = MONDAY_9AM_UTC.replace(hour=14)

        with self.assertRaises(SlotConflictError) as ctx:
            await self.service.create_booking(
                self.mock_session, self.user_context, self._booking(when=two_pm)
            )

        self.assertEqual(ctx.exception.message, "Time slot already booked")
        self.mock_sessions_repo.upsert_session.assert_not_awaited()
        self.mock_session.commit.assert_not_awaited()

        kwargs = self.mock_sessions_repo.get_mentor_sessions_between.await_args.kwargs
        self.assertEqual(kwargs["start"], datetime(2024, 1, 15, tzinfo=timezone.utc))
        self.assertEqual(kwargs["end"], datetime(2024, 1, 16, tzinfo=timezone.utc))
        self.assertEqual(kwargs["status"], SessionStatus.SCHEDULED)

    async def test_create_booking_uses_mentor_timezone(self):
        """Test weekday, time and the conflict window are read in the mentor's zone."""
        self.mentor.timezone = "America/New_York"
        self.mentor.availability = {"monday": ["09:00"]}
        # 14:00 UTC is 09:00 EST.
        when = datetime(2024, 1, 15, 14, 0, tzinfo=timezone.utc)

        await self.service.create_booking(
            self.mock_session, self.user_context, self._booking(when=when)
        )

        kwargs = self.mock_sessions_repo.get_mentor_sessions_between.await_args.kwargs
        self.assertEqual(kwargs["start"], datetime(2024, 1, 15, 5, tzinfo=timezone.utc))
        self.assertEqual(kwargs["end"], datetime(2024, 1, 16, 5, tzinfo=timezone.utc))
        self.assertEqual(self._stored_session().date, when)

    async def test_create_booking_naive_date_is_utc(self):
        """Test a booking date without offset is treated as UTC."""
        await self.service.create_booking(
            self.mock_session,
            self.user_context,
            self._booking(when=MONDAY_9AM_UTC.replace(tzinfo=None)),
        )

        self.assertEqual(self._stored_session().date, MONDAY_9AM_UTC)

    async def test_learner_name_from_profile(self):
        """Test the learner name comes from the profile when present."""
        self.mock_profiles_repo.get_by_id.return_value = ProfilesEntity(
            id=self.learner_id, full_name="Ada Lovelace"
        )

        await self.service.create_booking(
            self.mock_session, self.user_context, self._booking()
        )

        self.assertEqual(self._stored_session().learner_name, "Ada Lovelace")

    async def test_learner_name_falls_back_to_email(self):
        """Test the learner email is used when there is no profile name."""
        await self.service.create_booking(
            self.mock_session, self.user_context, self._booking()
        )

        self.assertEqual(self._stored_session().learner_name, "ada@example.com")

    async def test_learner_name_falls_back_to_unknown(self):
        """Test the placeholder name is used without profile or email."""
        user_context = UserContextDto(sub=str(self.learner_id))

        await self.service.create_booking(
            self.mock_session, user_context, self._booking()
        )

        self.assertEqual(self._stored_session().learner_name, "Unknown User")

    async def test_get_mentor_availability_without_date(self):
        """Test all weekly slots are returned sorted and de-duplicated."""
        self.mentor.availability = {
            "monday": ["14:00", "09:00"],
            "friday": ["09:00", "10:00"],
        }

        result = await self.service.get_mentor_availability(
            self.mock_session, self.mentor.id
        )

        self.assertEqual(result.available_times, ["09:00", "10:00", "14:00"])
        self.assertIsNone(result.date)
        self.mock_sessions_repo.get_mentor_sessions_between.assert_not_awaited()

    async def test_get_mentor_availability_for_date_excludes_booked(self):
        """Test slots already taken on the date are removed."""
        self.mock_sessions_repo.get_mentor_sessions_between.return_value = [
            MagicMock(spec=SessionsEntity, date=MONDAY_9AM_UTC)
        ]

        result = await self.service.get_mentor_availability(
            self.mock_session, self.mentor.id, day=date(2024, 1, 15)
        )

        self.assertEqual(result.available_times, ["14:00"])
        self.assertEqual(result.date, date(2024, 1, 15))

    async def test_get_mentor_availability_mentor_not_found(self):
        """Test availability of an unknown mentor raises NotFoundError."""
        self.mock_mentors_repo.get_by_id.return_value = None

        with self.assertRaises(NotFoundError):
            await self.service.get_mentor_availability(
                self.mock_session, uuid.uuid4()
            )

    def test_compute_session_price(self):
        """Test price is the hourly rate pro rata on duration."""
        self.assertEqual(compute_session_price(120.0, 90), 180.0)
        self.assertEqual(compute_session_price(100.0, 30), 50.0)


if __name__ == "__main__":
    unittest.main()
