import uuid
from pydantic import Field
from backend.dto.base_request_dto import BaseRequestDto


class EngagementCreateDto(BaseRequestDto):
    post_id: uuid.UUID
    action: str = Field(min_length=1)
    metadata: dict | None = None


class ReadingProgressCreateDto(BaseRequestDto):
    post_id: uuid.UUID
    progress: int = Field(ge=0, le=100)
    completed: bool = False
