from backend.dto.post_dto import (
    EngagementMetricsDto,
    PostDto,
    PostSearchResultDto,
    ScoredPostDto,
    TrendingPostDto,
)
from backend.dto.engagement_dto import EngagementDto, ReadingProgressDto
from backend.dto.moderation_dto import (
    PostReportDto,
    ReportedPostDto,
    ReportedPostSummaryDto,
)
from backend.entity.community_posts_entity import CommunityPostsEntity
from backend.entity.user_engagement_entity import UserEngagementEntity
from backend.entity.reading_progress_entity import ReadingProgressEntity
from backend.entity.post_reports_entity import PostReportsEntity


class CommunityMapper:
    """
    Mapper for converting community entities to DTOs.
    """

    def map_to_post_dto(self, entity: CommunityPostsEntity) -> PostDto:
        """Maps a CommunityPostsEntity to a PostDto."""
        return PostDto(
            id=entity.id,
            user_id=entity.user_id,
            title=entity.title,
            content=entity.content,
            post_type=entity.post_type,
            tags=entity.tags or [],
            likes_count=entity.likes_count or 0,
            comments_count=entity.comments_count or 0,
            status=entity.status,
            created_at=entity.created_at,
        )

    def map_to_post_dtos(self, entities: list[CommunityPostsEntity]) -> list[PostDto]:
        return [self.map_to_post_dto(e) for e in entities]

    def map_to_scored_post_dto(
        self, entity: CommunityPostsEntity, score: float
    ) -> ScoredPostDto:
        """Maps a post and its personalization score to a ScoredPostDto."""
        return ScoredPostDto(
            **self.map_to_post_dto(entity).model_dump(),
            personalization_score=score,
            engagement_count=entity.likes_count or 0,
        )

    def map_to_engagement_dto(self, entity: UserEngagementEntity) -> EngagementDto:
        return EngagementDto(
            id=entity.id,
            user_id=entity.user_id,
            post_id=entity.post_id,
            action=entity.action,
            metadata=entity.event_metadata,
            timestamp=entity.timestamp,
        )

    def map_to_reading_progress_dto(
        self, entity: ReadingProgressEntity
    ) -> ReadingProgressDto:
        return ReadingProgressDto.model_validate(entity)

    def map_to_post_report_dto(self, entity: PostReportsEntity) -> PostReportDto:
        return PostReportDto.model_validate(entity)

    def map_to_search_result_dto(
        self, entity: CommunityPostsEntity, relevance_score: float
    ) -> PostSearchResultDto:
        return PostSearchResultDto(
            **self.map_to_post_dto(entity).model_dump(),
            relevance_score=relevance_score,
        )

    def map_to_trending_post_dto(
        self,
        entity: CommunityPostsEntity,
        trending_score: float,
        total_engagement: int,
    ) -> TrendingPostDto:
        """Maps a post, its trending score and its weighted engagement to a TrendingPostDto."""
        post = self.map_to_post_dto(entity)
        return TrendingPostDto(
            **post.model_dump(),
            trending_score=trending_score,
            engagement_metrics=EngagementMetricsDto(
                likes=post.likes_count,
                comments=post.comments_count,
                total_engagement=total_engagement,
            ),
        )

    def map_to_reported_post_dto(
        self,
        report: PostReportsEntity,
        post: CommunityPostsEntity,
        author_name: str | None,
        reporter_name: str | None,
    ) -> ReportedPostDto:
        """Maps a pending report joined with its post and profile names to a ReportedPostDto."""
        return ReportedPostDto(
            **self.map_to_post_report_dto(report).model_dump(),
            post=ReportedPostSummaryDto(
                id=post.id,
                title=post.title,
                content=post.content,
                user_id=post.user_id,
                author_name=author_name,
                created_at=post.created_at,
            ),
            reporter_name=reporter_name,
        )
