import datetime
import uuid
from pydantic import Field
from backend.dto.base_dto import BaseDto


class MentorAvailabilityDto(BaseDto):
    mentor_id: uuid.UUID
    date: datetime.date | None = None
    available_times: list[str] = Field(default_factory=list)
