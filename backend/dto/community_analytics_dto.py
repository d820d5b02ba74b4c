from typing import Literal
from pydantic import Field
from backend.dto.base_dto import BaseDto


class FeedStatsDto(BaseDto):
    total_posts: int
    total_users: int
    total_likes: int
    engagement_rate: float


class UserEngagementSummaryDto(BaseDto):
    posts_created: int
    total_likes_received: int
    total_comments_received: int
    likes_given: int
    comments_given: int
    engagement_score: int


class TrendingTagDto(BaseDto):
    tag: str
    count: int


class TrendingTagsDto(BaseDto):
    trending_tags: list[TrendingTagDto] = Field(default_factory=list)


class SuggestionDto(BaseDto):
    type: Literal["post", "author", "tag"]
    value: str


class AutocompleteDto(BaseDto):
    posts: list[SuggestionDto] = Field(default_factory=list)
    authors: list[SuggestionDto] = Field(default_factory=list)
    tags: list[SuggestionDto] = Field(default_factory=list)
