import uuid
from datetime import datetime
from backend.dto.base_dto import BaseDto


class EngagementDto(BaseDto):
    id: uuid.UUID
    user_id: uuid.UUID
    post_id: uuid.UUID
    action: str
    metadata: dict | None = None
    timestamp: datetime


class ReadingProgressDto(BaseDto):
    id: uuid.UUID
    user_id: uuid.UUID
    post_id: uuid.UUID
    progress: int
    completed: bool
    last_read_at: datetime
