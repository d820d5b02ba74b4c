import uuid
from datetime import datetime
from backend.entity.sessions_entity import SessionsEntity
from backend.common.mentorship_enums import SessionStatus
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession


class SessionsRepository:
    """
    Repository for handling database operations related to SessionsEntity.
    """

    async def get_by_id(
        self, session: AsyncSession, session_id: uuid.UUID
    ) -> SessionsEntity | None:
        """
        Retrieve a mentorship session by ID.

        Args:
            session (AsyncSession): The active async database session.
            session_id (uuid.UUID): The ID of the mentorship session.

        Returns:
            SessionsEntity | None: The matching session if found; otherwise None.
        """
        if not session_id:
            return None

        result = await session.execute(
            select(SessionsEntity).where(SessionsEntity.id == session_id)
        )

        return result.scalars().one_or_none()

    async def get_mentor_sessions_between(
        self,
        session: AsyncSession,
        mentor_id: uuid.UUID,
        start: datetime,
        end: datetime,
        status: SessionStatus = SessionStatus.SCHEDULED,
    ) -> list[SessionsEntity]:
        """
        Retrieve a mentor's sessions with the given status starting in [start, end).

        Args:
            session (AsyncSession): The active async database session.
            mentor_id (uuid.UUID): The mentor whose sessions are queried.
            start (datetime): Inclusive lower bound on the session start.
            end (datetime): Exclusive upper bound on the session start.
            status (SessionStatus): Status filter, scheduled by default.

        Returns:
            list[SessionsEntity]: Matching sessions ordered by start time.
        """
        result = await session.execute(
            select(SessionsEntity)
            .where(
                and_(
                    SessionsEntity.mentor_id == mentor_id,
                    SessionsEntity.status == status,
                    SessionsEntity.date >= start,
                    SessionsEntity.date < end,
                )
            )
            .order_by(SessionsEntity.date)
        )

        return list(result.scalars().all())

    async def upsert_session(
        self, session: AsyncSession, entity: SessionsEntity
    ) -> SessionsEntity:
        """
        Inserts or updates a SessionsEntity object in the database.

        This method using session.merge() handles data persistence, it will
        update the entity if the primary key exists, or insert it otherwise.

        Args:
            session (AsyncSession): The active async database session.
            entity (SessionsEntity): The session to persist.

        Returns:
            SessionsEntity: The entity synchronized with the database, including
            generated keys and default values.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity
