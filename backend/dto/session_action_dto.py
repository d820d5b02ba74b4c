from pydantic import Field
from backend.dto.base_request_dto import BaseRequestDto
from backend.common.mentorship_enums import SessionAction


class SessionActionDto(BaseRequestDto):
    action: SessionAction
    feedback: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    notes: str | None = None
