import uuid
from datetime import datetime
from pydantic import AliasChoices, Field
from backend.dto.base_request_dto import BaseRequestDto


class BookingCreateDto(BaseRequestDto):
    mentor_id: uuid.UUID
    date: datetime
    duration_minutes: int = Field(
        gt=0,
        validation_alias=AliasChoices(
            "durationMinutes", "duration", "duration_minutes"
        ),
    )
    topic: str = Field(min_length=1)
