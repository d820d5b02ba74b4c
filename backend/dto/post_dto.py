import uuid
from datetime import datetime
from pydantic import Field
from backend.dto.base_dto import BaseDto
from backend.common.community_enums import PostStatus


class PostDto(BaseDto):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    content: str | None = None
    post_type: str | None = None
    tags: list[str] = Field(default_factory=list)
    likes_count: int = 0
    comments_count: int = 0
    status: PostStatus
    created_at: datetime | None = None


class ScoredPostDto(PostDto):
    personalization_score: float
    engagement_count: int


class FeedDto(BaseDto):
    posts: list[ScoredPostDto] = Field(default_factory=list)
    page: int
    page_size: int
    has_more: bool


class PostSearchResultDto(PostDto):
    relevance_score: float


class PostSearchDto(BaseDto):
    posts: list[PostSearchResultDto] = Field(default_factory=list)
    page: int
    page_size: int
    has_more: bool
    total_results: int


class PostFilterDto(BaseDto):
    posts: list[PostDto] = Field(default_factory=list)
    page: int
    page_size: int
    has_more: bool


class EngagementMetricsDto(BaseDto):
    likes: int
    comments: int
    total_engagement: int


class TrendingPostDto(PostDto):
    trending_score: float
    engagement_metrics: EngagementMetricsDto


class SimilarPostsDto(BaseDto):
    posts: list[PostDto] = Field(default_factory=list)
    original_post: PostDto
