import uuid
from datetime import datetime
from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Integer,
    String,
    func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column
from backend.common.base import Base
from backend.common.mentorship_enums import SessionStatus


class SessionsEntity(Base):
    __tablename__ = "sessions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    mentor_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("mentors.id"))
    learner_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True))
    mentor_name: Mapped[str] = mapped_column(String)
    learner_name: Mapped[str] = mapped_column(String)

    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    duration_minutes: Mapped[int] = mapped_column(Integer)
    topic: Mapped[str] = mapped_column(String)
    price: Mapped[float] = mapped_column(Float)

    status: Mapped[SessionStatus] = mapped_column(
        SAEnum(
            SessionStatus,
            name="session_status",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=SessionStatus.SCHEDULED,
    )

    feedback: Mapped[str | None] = mapped_column(String)
    rating: Mapped[int | None] = mapped_column(Integer)
    notes: Mapped[str | None] = mapped_column(String)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), onupdate=func.now()
    )

    # No unique index on (mentor_id, date): double booking is checked by the
    # booking service before insert.
    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="check_positive_duration"),
        CheckConstraint(
            "rating IS NULL OR (rating BETWEEN 1 AND 5)", name="check_rating_range"
        ),
    )
