import uuid
from datetime import datetime
from pydantic import Field
from backend.dto.base_dto import BaseDto
from backend.dto.base_request_dto import BaseRequestDto
from backend.common.community_enums import ModerationAction, ReportStatus


class PostReportCreateDto(BaseRequestDto):
    reason: str = Field(min_length=1)
    details: str | None = None


class ModerationRequestDto(BaseRequestDto):
    action: ModerationAction
    reason: str | None = None


class PostReportDto(BaseDto):
    id: uuid.UUID
    post_id: uuid.UUID
    reporter_id: uuid.UUID
    reason: str
    details: str | None = None
    status: ReportStatus
    created_at: datetime | None = None


class ReportedPostSummaryDto(BaseDto):
    id: uuid.UUID
    title: str
    content: str | None = None
    user_id: uuid.UUID
    author_name: str | None = None
    created_at: datetime | None = None


class ReportedPostDto(PostReportDto):
    post: ReportedPostSummaryDto
    reporter_name: str | None = None


class ModerationStatsDto(BaseDto):
    total_reports: int
    pending_reports: int
    resolved_reports: int
    hidden_posts: int
    deleted_posts: int
