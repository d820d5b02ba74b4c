import uuid
from datetime import date
from http import HTTPStatus
from fastapi import APIRouter, Query
from backend.dto.availability_dto import MentorAvailabilityDto
from backend.dto.booking_create_dto import BookingCreateDto
from backend.dto.session_action_dto import SessionActionDto
from backend.dto.session_dto import SessionDto
from backend.dto.user_context_dto import UserContextDto
from backend.common.fast_api_response_wrapper import api_response
from backend.common.api_endpoints import (
    MENTORSHIP_BOOKINGS_ENDPOINT,
    MENTORSHIP_MENTOR_AVAILABILITY_ENDPOINT,
    MENTORSHIP_SESSION_ACTIONS_ENDPOINT,
)
from backend.utils.permission_decorators import authenticate


class MentorshipController:
    def __init__(self, booking_service, session_lifecycle_service, database):
        """
        Initialize the MentorshipController with required dependencies and register routes.

        Args:
            booking_service (BookingService): Books sessions and reads availability.
            session_lifecycle_service (SessionLifecycleService): Applies session actions.
            database (Database): Database access object providing async session management.
        """
        if not booking_service or not session_lifecycle_service:
            raise ValueError(
                "BookingService and SessionLifecycleService instances are required."
            )

        self.booking_service = booking_service
        self.session_lifecycle_service = session_lifecycle_service
        self.database = database

        self.router = APIRouter(tags=["mentorship"])

        self.router.add_api_route(
            MENTORSHIP_BOOKINGS_ENDPOINT,
            endpoint=authenticate()(self.create_booking),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_SESSION_ACTIONS_ENDPOINT,
            endpoint=authenticate()(self.transition_session),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_MENTOR_AVAILABILITY_ENDPOINT,
            endpoint=authenticate()(self.get_mentor_availability),
            methods=["GET"],
            response_model=None,
        )

    async def create_booking(
        self,
        current_user: UserContextDto,
        body: BookingCreateDto,
    ):
        """
        Book a session with a mentor for the current user.

        Returns:
            A 201 API response containing the created booking.

        Raises:
            HTTPException:
                - 400 if the body is invalid or the time slot is not available
                - 404 if the mentor does not exist
                - 409 if the mentor is already booked on that date
        """
        async with self.database.session() as session:
            booking: SessionDto = await self.booking_service.create_booking(
                session=session, user_context=current_user, booking=body
            )

        return api_response(
            message="Booking created successfully",
            data={"booking": booking},
            status_code=HTTPStatus.CREATED,
        )

    async def transition_session(
        self,
        current_user: UserContextDto,
        session_id: uuid.UUID,
        body: SessionActionDto,
    ):
        """
        Start, complete, cancel or update a session.

        Returns:
            API response containing the updated session.
        """
        async with self.database.session() as session:
            (
                updated,
                message,
            ) = await self.session_lifecycle_service.transition_session(
                session=session,
                user_context=current_user,
                session_id=session_id,
                request=body,
            )

        return api_response(message=message, data={"session": updated})

    async def get_mentor_availability(
        self,
        mentor_id: uuid.UUID,
        day: date | None = Query(None, alias="date"),
    ):
        """
        List the open start times of a mentor, optionally for one date.

        Query Parameters:
            date (str | None): Calendar date in YYYY-MM-DD format.

        Returns:
            API response containing the mentor's available HH:MM start times.
        """
        async with self.database.session() as session:
            availability: MentorAvailabilityDto = (
                await self.booking_service.get_mentor_availability(
                    session, mentor_id=mentor_id, day=day
                )
            )

        return api_response(
            message="Successfully fetched mentor availability.",
            data=availability,
        )
