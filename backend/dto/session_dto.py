import uuid
from datetime import datetime
from backend.dto.base_dto import BaseDto
from backend.common.mentorship_enums import SessionStatus


class SessionDto(BaseDto):
    id: uuid.UUID
    mentor_id: uuid.UUID
    learner_id: uuid.UUID
    mentor_name: str
    learner_name: str
    date: datetime
    duration_minutes: int
    topic: str
    price: float
    status: SessionStatus
    feedback: str | None = None
    rating: int | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
