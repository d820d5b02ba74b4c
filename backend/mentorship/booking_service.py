import uuid
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from backend.common.constants import MINUTES_PER_HOUR, UNKNOWN_LEARNER_NAME
from backend.common.mentorship_enums import SessionStatus
from backend.common.service_errors import (
    NotFoundError,
    SlotConflictError,
    SlotUnavailableError,
)
from backend.dto.availability_dto import MentorAvailabilityDto
from backend.dto.booking_create_dto import BookingCreateDto
from backend.dto.session_dto import SessionDto
from backend.dto.user_context_dto import UserContextDto
from backend.entity.mentors_entity import MentorsEntity
from backend.entity.sessions_entity import SessionsEntity


def compute_session_price(hourly_rate: float, duration_minutes: int) -> float:
    """Price of a session billed pro rata on the mentor's hourly rate."""
    return hourly_rate * (duration_minutes / MINUTES_PER_HOUR)


class BookingService:
    """
    Service for booking mentorship sessions and reading mentor availability.

    Weekday and time-of-day are always read in the mentor's configured time
    zone (UTC when unset). The double-booking rule is scoped to the calendar
    date: any scheduled session of the mentor on that date blocks a new
    booking, whatever its time.
    """

    def __init__(
        self,
        logger,
        mentors_repository,
        sessions_repository,
        profiles_repository,
        mentorship_mapper,
        date_time_util,
    ):
        """
        Initializes the BookingService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            mentors_repository (MentorsRepository): Access to mentor records.
            sessions_repository (SessionsRepository): Access to session records.
            profiles_repository (ProfilesRepository): Access to learner profiles.
            mentorship_mapper (MentorshipMapper): Converts entities to DTOs.
            date_time_util (DateTimeUtil): Time zone helpers.
        """
        self.logger = logger
        self.mentors_repository = mentors_repository
        self.sessions_repository = sessions_repository
        self.profiles_repository = profiles_repository
        self.mentorship_mapper = mentorship_mapper
        self.date_time_util = date_time_util

    async def _get_mentor(
        self, session: AsyncSession, mentor_id: uuid.UUID
    ) -> MentorsEntity:
        mentor = await self.mentors_repository.get_by_id(session, mentor_id)
        if not mentor:
            raise NotFoundError("Mentor not found")
        return mentor

    async def _resolve_learner_name(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> str:
        profile = await self.profiles_repository.get_by_id(
            session, user_context.user_id
        )
        if profile and profile.full_name:
            return profile.full_name
        return user_context.primary_email or UNKNOWN_LEARNER_NAME

    async def create_booking(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        booking: BookingCreateDto,
    ) -> SessionDto:
        """
        Book a session with a mentor for the authenticated learner.

        This method:
        1. Resolves the mentor.
        2. Checks the requested start time against the mentor's weekday availability.
        3. Rejects the booking if the mentor already has a scheduled session that day.
        4. Prices the session and inserts it as scheduled.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The authenticated learner.
            booking (BookingCreateDto): Requested mentor, start, duration and topic.

        Returns:
            SessionDto: The created session.

        Raises:
            NotFoundError: If the mentor does not exist.
            SlotUnavailableError: If the start time is not an availability slot.
            SlotConflictError: If the mentor is already booked on that date.
        """
        mentor = await self._get_mentor(session, booking.mentor_id)
        zone = self.date_time_util.resolve_timezone(mentor.timezone)

        weekday, time_of_day = self.date_time_util.weekday_and_time(
            booking.date, zone
        )
        day_slots = (mentor.availability or {}).get(weekday.value) or []
        if time_of_day not in day_slots:
            raise SlotUnavailableError(
                "Time slot not available", details=f"{weekday.value} {time_of_day}"
            )

        local_day = self.date_time_util.to_zone(booking.date, zone).date()
        day_start, day_end = self.date_time_util.utc_day_bounds(local_day, zone)
        existing = await self.sessions_repository.get_mentor_sessions_between(
            session,
            mentor_id=mentor.id,
            start=day_start,
            end=day_end,
            status=SessionStatus.SCHEDULED,
        )
        if existing:
            self.logger.info(
                "[BookingService] mentor %s already has %s scheduled session(s) on %s",
                mentor.id,
                len(existing),
                local_day,
            )
            raise SlotConflictError("Time slot already booked")

        now = self.date_time_util.now_utc()
        new_session = SessionsEntity(
            mentor_id=mentor.id,
            learner_id=user_context.user_id,
            mentor_name=mentor.name,
            learner_name=await self._resolve_learner_name(session, user_context),
            date=self.date_time_util.to_zone(booking.date, zone),
            duration_minutes=booking.duration_minutes,
            topic=booking.topic,
            price=compute_session_price(mentor.hourly_rate, booking.duration_minutes),
            status=SessionStatus.SCHEDULED,
            created_at=now,
            updated_at=now,
        )

        created = await self.sessions_repository.upsert_session(session, new_session)
        await session.commit()

        self.logger.info(
            "[BookingService] session %s booked with mentor %s by learner %s",
            created.id,
            mentor.id,
            user_context.sub,
        )
        return self.mentorship_mapper.map_to_session_dto(created)

    async def get_mentor_availability(
        self,
        session: AsyncSession,
        mentor_id: uuid.UUID,
        day: date | None = None,
    ) -> MentorAvailabilityDto:
        """
        List the open start times of a mentor.

        Without a date, returns every slot across the week. With a date, returns
        that weekday's slots minus the start times of sessions already
        scheduled on the date.

        Args:
            session (AsyncSession): Active database async session.
            mentor_id (uuid.UUID): The mentor.
            day (date | None): Calendar date in the mentor's zone.

        Returns:
            MentorAvailabilityDto: Sorted, de-duplicated HH:MM start times.

        Raises:
            NotFoundError: If the mentor does not exist.
        """
        mentor = await self._get_mentor(session, mentor_id)
        availability = mentor.availability or {}

        if day is None:
            times = {slot for slots in availability.values() for slot in slots or []}
            return MentorAvailabilityDto(
                mentor_id=mentor.id, date=None, available_times=sorted(times)
            )

        zone = self.date_time_util.resolve_timezone(mentor.timezone)
        day_start, day_end = self.date_time_util.utc_day_bounds(day, zone)
        booked = await self.sessions_repository.get_mentor_sessions_between(
            session,
            mentor_id=mentor.id,
            start=day_start,
            end=day_end,
            status=SessionStatus.SCHEDULED,
        )
        booked_times = {
            self.date_time_util.weekday_and_time(s.date, zone)[1] for s in booked
        }

        weekday, _ = self.date_time_util.weekday_and_time(day_start, zone)
        day_slots = availability.get(weekday.value) or []

        return MentorAvailabilityDto(
            mentor_id=mentor.id,
            date=day,
            available_times=sorted(set(day_slots) - booked_times),
        )
