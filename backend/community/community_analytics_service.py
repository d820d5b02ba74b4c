from datetime import timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from backend.common.community_enums import EngagementActionType
from backend.common.constants import TRENDING_POSTS_LIMIT, TRENDING_WINDOW_DAYS
from backend.dto.community_analytics_dto import (
    FeedStatsDto,
    TrendingTagDto,
    TrendingTagsDto,
    UserEngagementSummaryDto,
)
from backend.dto.post_dto import TrendingPostDto
from backend.dto.user_context_dto import UserContextDto


class CommunityAnalyticsService:
    """
    Read-only community statistics: trending posts and tags, community-wide
    totals and a user's own engagement summary.
    """

    def __init__(
        self,
        logger,
        community_posts_repository,
        profiles_repository,
        user_engagement_repository,
        trending_scorer,
        community_mapper,
        date_time_util,
    ):
        """
        Initializes the CommunityAnalyticsService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            community_posts_repository (CommunityPostsRepository): Access to posts.
            profiles_repository (ProfilesRepository): Access to user counts.
            user_engagement_repository (UserEngagementRepository): Access to engagement events.
            trending_scorer (TrendingScorer): Trending and engagement scores.
            community_mapper (CommunityMapper): Converts entities to DTOs.
            date_time_util (DateTimeUtil): Clock helper.
        """
        self.logger = logger
        self.community_posts_repository = community_posts_repository
        self.profiles_repository = profiles_repository
        self.user_engagement_repository = user_engagement_repository
        self.trending_scorer = trending_scorer
        self.community_mapper = community_mapper
        self.date_time_util = date_time_util

    async def get_trending_posts(self, session: AsyncSession) -> list[TrendingPostDto]:
        """
        Rank the most liked visible posts of the last seven days by trending score.

        The ten most liked posts of the window are fetched, then re-ordered by
        trending score so a fresh post with fewer likes can overtake an older one.

        Args:
            session (AsyncSession): Active database async session.

        Returns:
            list[TrendingPostDto]: Up to ten posts, highest trending score first.
        """
        now = self.date_time_util.now_utc()
        candidates = await self.community_posts_repository.get_trending_candidates(
            session,
            since=now - timedelta(days=TRENDING_WINDOW_DAYS),
            limit=TRENDING_POSTS_LIMIT,
        )

        ranked = self.trending_scorer.rank_trending(candidates, now)

        return [
            self.community_mapper.map_to_trending_post_dto(
                post,
                trending_score=score,
                total_engagement=self.trending_scorer.engagement_score(
                    post.likes_count, post.comments_count
                ),
            )
            for post, score in ranked
        ]

    async def get_feed_stats(self, session: AsyncSession) -> FeedStatsDto:
        """
        Community-wide totals.

        The engagement rate is likes per post as a percentage, rounded to one
        decimal place. With no posts the divisor is taken as one.

        Args:
            session (AsyncSession): Active database async session.

        Returns:
            FeedStatsDto: Post, user and like totals with the engagement rate.
        """
        total_posts = await self.community_posts_repository.count_posts(session)
        total_users = await self.profiles_repository.count_profiles(session)
        total_likes = await self.community_posts_repository.sum_likes(session)

        return FeedStatsDto(
            total_posts=total_posts,
            total_users=total_users,
            total_likes=total_likes,
            engagement_rate=round(total_likes / max(total_posts, 1) * 100, 1),
        )

    async def get_user_engagement(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> UserEngagementSummaryDto:
        """
        Summarize what the current user wrote and how they engaged with others.

        Likes and comments received are the totals over the user's own posts.
        Likes and comments given are counted from the user's engagement events.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The authenticated user.

        Returns:
            UserEngagementSummaryDto: The user's engagement totals and score.
        """
        user_id = user_context.user_id

        posts, likes, comments = (
            await self.community_posts_repository.get_author_totals(session, user_id)
        )
        given = await self.user_engagement_repository.count_actions_by_user_id(
            session,
            user_id=user_id,
            actions=[EngagementActionType.LIKE.value, EngagementActionType.COMMENT.value],
        )

        self.logger.debug(
            "[CommunityAnalyticsService] engagement summary for %s: %s posts",
            user_context.sub,
            posts,
        )

        return UserEngagementSummaryDto(
            posts_created=posts,
            total_likes_received=likes,
            total_comments_received=comments,
            likes_given=given[EngagementActionType.LIKE.value],
            comments_given=given[EngagementActionType.COMMENT.value],
            engagement_score=self.trending_scorer.engagement_score(likes, comments),
        )

    async def get_trending_tags(self, session: AsyncSession) -> TrendingTagsDto:
        """
        The most used tags on visible posts of the last seven days.

        Args:
            session (AsyncSession): Active database async session.

        Returns:
            TrendingTagsDto: Up to twenty tags with the number of posts carrying them.
        """
        since = self.date_time_util.now_utc() - timedelta(days=TRENDING_WINDOW_DAYS)
        tag_lists = await self.community_posts_repository.get_recent_tag_lists(
            session, since=since
        )

        return TrendingTagsDto(
            trending_tags=[
                TrendingTagDto(tag=tag, count=count)
                for tag, count in self.trending_scorer.count_tags(tag_lists)
            ]
        )
