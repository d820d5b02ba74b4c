import uuid
from sqlalchemy.ext.asyncio import AsyncSession
from backend.common.constants import AUDIT_SESSION_ACTION_TEMPLATE, SESSIONS_TABLE
from backend.common.mentorship_enums import SessionAction, SessionStatus
from backend.common.service_errors import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
)
from backend.dto.session_action_dto import SessionActionDto
from backend.dto.session_dto import SessionDto
from backend.dto.user_context_dto import UserContextDto

# (current status, action) -> next status. Pairs not listed are illegal.
SESSION_TRANSITIONS: dict[tuple[SessionStatus, SessionAction], SessionStatus] = {
    (SessionStatus.SCHEDULED, SessionAction.START): SessionStatus.IN_PROGRESS,
    (SessionStatus.IN_PROGRESS, SessionAction.COMPLETE): SessionStatus.COMPLETED,
    (SessionStatus.SCHEDULED, SessionAction.CANCEL): SessionStatus.CANCELLED,
    (SessionStatus.IN_PROGRESS, SessionAction.CANCEL): SessionStatus.CANCELLED,
    (SessionStatus.COMPLETED, SessionAction.UPDATE): SessionStatus.COMPLETED,
}

SESSION_ACTION_MESSAGES = {
    SessionAction.START: "Session started successfully",
    SessionAction.COMPLETE: "Session completed successfully",
    SessionAction.CANCEL: "Session cancelled successfully",
    SessionAction.UPDATE: "Session updated successfully",
}

LEARNER_FIELDS = {"feedback", "rating", "notes"}


def next_session_status(
    current: SessionStatus, action: SessionAction
) -> SessionStatus:
    """
    Return the status a session moves to when the action is applied.

    Raises:
        InvalidTransitionError: If the action is not legal from the current status.
    """
    try:
        return SESSION_TRANSITIONS[(current, action)]
    except KeyError:
        raise InvalidTransitionError(
            f"Cannot {action.value} a session that is {current.value}"
        ) from None


class SessionLifecycleService:
    """Service enforcing the status transitions of mentorship sessions."""

    def __init__(
        self,
        logger,
        sessions_repository,
        mentorship_mapper,
        audit_log_service,
        date_time_util,
    ):
        """
        Initializes the SessionLifecycleService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            sessions_repository (SessionsRepository): Access to session records.
            mentorship_mapper (MentorshipMapper): Converts entities to DTOs.
            audit_log_service (AuditLogService): Best-effort audit writer.
            date_time_util (DateTimeUtil): Clock helper.
        """
        self.logger = logger
        self.sessions_repository = sessions_repository
        self.mentorship_mapper = mentorship_mapper
        self.audit_log_service = audit_log_service
        self.date_time_util = date_time_util

    async def transition_session(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        session_id: uuid.UUID,
        request: SessionActionDto,
    ) -> tuple[SessionDto, str]:
        """
        Apply a lifecycle action to a session.

        Only the session's mentor or learner may act on it. Feedback, rating
        and notes are attached through the `update` action, which is legal
        only on completed sessions and only for the learner. Transitions are
        not idempotent: repeating an action fails once the status moved on.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The authenticated caller.
            session_id (uuid.UUID): The session to act on.
            request (SessionActionDto): The action and optional learner fields.

        Returns:
            tuple[SessionDto, str]
                - SessionDto: The updated session.
                - str: A message describing the applied action.

        Raises:
            NotFoundError: If the session does not exist.
            ForbiddenError: If the caller is not a participant, or a mentor tries to update.
            InvalidTransitionError: If the action is illegal from the current status.
        """
        entity = await self.sessions_repository.get_by_id(session, session_id)
        if not entity:
            raise NotFoundError("Session not found")

        caller_id = user_context.user_id
        if caller_id not in (entity.mentor_id, entity.learner_id):
            raise ForbiddenError("Access denied to this session")

        action = request.action
        new_status = next_session_status(entity.status, action)

        if action == SessionAction.UPDATE:
            if caller_id != entity.learner_id:
                raise ForbiddenError("Only learners can leave feedback")
            updates = request.to_db_dict(include=LEARNER_FIELDS)
            for field_name, value in updates.items():
                setattr(entity, field_name, value)

        previous_status = entity.status
        entity.status = new_status
        entity.updated_at = self.date_time_util.now_utc()

        updated = await self.sessions_repository.upsert_session(session, entity)

        await self.audit_log_service.record(
            session,
            user_id=caller_id,
            action=AUDIT_SESSION_ACTION_TEMPLATE.format(action=action.name),
            table_name=SESSIONS_TABLE,
            record_id=updated.id,
            new_data={"from": previous_status.value, "to": new_status.value},
        )
        await session.commit()

        self.logger.info(
            "[SessionLifecycleService] session %s: %s -> %s by %s",
            updated.id,
            previous_status.value,
            new_status.value,
            user_context.sub,
        )
        return (
            self.mentorship_mapper.map_to_session_dto(updated),
            SESSION_ACTION_MESSAGES[action],
        )
