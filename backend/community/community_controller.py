import uuid
from datetime import datetime
from fastapi import APIRouter, Query
from backend.dto.engagement_create_dto import (
    EngagementCreateDto,
    ReadingProgressCreateDto,
)
from backend.dto.user_context_dto import UserContextDto
from backend.common.community_enums import EngagementLevel, SearchSortBy
from backend.common.constants import FEED_DEFAULT_PAGE_SIZE, FEED_MAX_PAGE_SIZE
from backend.common.fast_api_response_wrapper import api_response
from backend.common.api_endpoints import (
    COMMUNITY_AUTOCOMPLETE_ENDPOINT,
    COMMUNITY_ENGAGEMENT_ENDPOINT,
    COMMUNITY_FEED_ENDPOINT,
    COMMUNITY_FILTER_ENDPOINT,
    COMMUNITY_MY_ENGAGEMENT_ENDPOINT,
    COMMUNITY_READING_PROGRESS_ENDPOINT,
    COMMUNITY_SEARCH_ENDPOINT,
    COMMUNITY_SIMILAR_POSTS_ENDPOINT,
    COMMUNITY_STATS_ENDPOINT,
    COMMUNITY_TRENDING_POSTS_ENDPOINT,
    COMMUNITY_TRENDING_TAGS_ENDPOINT,
)
from backend.utils.permission_decorators import authenticate


def _resolve_page_size(page_size: int | None, limit: int | None) -> int:
    if page_size is not None:
        return page_size
    if limit is not None:
        return limit
    return FEED_DEFAULT_PAGE_SIZE


def _split_tags(tags: str | None) -> list[str] | None:
    if not tags:
        return None
    return [t.strip() for t in tags.split(",") if t.strip()] or None


class CommunityController:
    """
    FastAPI controller exposing the community feed, engagement tracking,
    post discovery and community statistics endpoints.
    """

    def __init__(
        self, feed_service, engagement_service, community_analytics_service, database
    ):
        """
        Initialize the CommunityController with its dependencies and register routes.

        Args:
            feed_service (FeedService): Feed, similar posts, search, filtering and suggestions.
            engagement_service (EngagementService): Engagement and reading progress writes.
            community_analytics_service (CommunityAnalyticsService): Trending content and stats.
            database (Database): Database access object providing async session management.
        """
        self.router = APIRouter(tags=["community"])
        self.feed_service = feed_service
        self.engagement_service = engagement_service
        self.community_analytics_service = community_analytics_service
        self.database = database

        routes = [
            (COMMUNITY_FEED_ENDPOINT, self.get_personalized_feed, "GET"),
            (COMMUNITY_ENGAGEMENT_ENDPOINT, self.track_engagement, "POST"),
            (COMMUNITY_MY_ENGAGEMENT_ENDPOINT, self.get_my_engagement, "GET"),
            (COMMUNITY_SEARCH_ENDPOINT, self.search_posts, "GET"),
            (COMMUNITY_FILTER_ENDPOINT, self.filter_posts, "GET"),
            (COMMUNITY_AUTOCOMPLETE_ENDPOINT, self.autocomplete, "GET"),
            (COMMUNITY_TRENDING_POSTS_ENDPOINT, self.get_trending_posts, "GET"),
            (COMMUNITY_TRENDING_TAGS_ENDPOINT, self.get_trending_tags, "GET"),
            (COMMUNITY_STATS_ENDPOINT, self.get_feed_stats, "GET"),
            (COMMUNITY_SIMILAR_POSTS_ENDPOINT, self.get_similar_posts, "GET"),
            (COMMUNITY_READING_PROGRESS_ENDPOINT, self.update_reading_progress, "PUT"),
        ]
        for path, endpoint, method in routes:
            self.router.add_api_route(
                path,
                endpoint=authenticate()(endpoint),
                methods=[method],
                response_model=None,
            )

    async def get_personalized_feed(
        self,
        current_user: UserContextDto,
        page: int = Query(1, ge=1),
        page_size: int | None = Query(
            None, alias="pageSize", ge=1, le=FEED_MAX_PAGE_SIZE
        ),
        limit: int | None = Query(None, ge=1, le=FEED_MAX_PAGE_SIZE),
    ):
        """
        Retrieve one page of the current user's personalized feed.

        Query Parameters:
            page (int): 1-based page number. Defaults to 1.
            pageSize (int | None): Posts per page, 1 to 100. Defaults to 20.
            limit (int | None): Alias of pageSize.

        Returns:
            API response containing the scored posts and pagination info.
        """
        async with self.database.session() as session:
            feed = await self.feed_service.get_personalized_feed(
                session,
                user_context=current_user,
                page=page,
                page_size=_resolve_page_size(page_size, limit),
            )

        return api_response(message="Successfully fetched feed.", data=feed)

    async def track_engagement(
        self,
        current_user: UserContextDto,
        body: EngagementCreateDto,
    ):
        """
        Record that the current user interacted with a post.

        Returns:
            API response containing the stored engagement event.
        """
        async with self.database.session() as session:
            engagement = await self.engagement_service.track_engagement(
                session, user_context=current_user, engagement=body
            )

        return api_response(
            message="Engagement tracked successfully",
            data={"engagement": engagement},
        )

    async def get_similar_posts(self, post_id: uuid.UUID):
        """
        Retrieve posts similar to the given post.

        Returns:
            API response containing the similar posts and the original post.
        """
        async with self.database.session() as session:
            similar = await self.feed_service.get_similar_posts(session, post_id)

        return api_response(message="Successfully fetched similar posts.", data=similar)

    async def update_reading_progress(
        self,
        current_user: UserContextDto,
        body: ReadingProgressCreateDto,
    ):
        """
        Store how far the current user has read a post.

        Returns:
            API response containing the stored reading progress.
        """
        async with self.database.session() as session:
            progress = await self.engagement_service.update_reading_progress(
                session, user_context=current_user, reading_progress=body
            )

        return api_response(
            message="Reading progress updated successfully",
            data={"progress": progress},
        )

    async def search_posts(
        self,
        q: str | None = Query(None),
        tags: str | None = Query(None),
        post_type: str | None = Query(None, alias="postType"),
        author: str | None = Query(None),
        date_from: datetime | None = Query(None, alias="dateFrom"),
        date_to: datetime | None = Query(None, alias="dateTo"),
        sort_by: SearchSortBy = Query(SearchSortBy.RELEVANCE, alias="sortBy"),
        page: int = Query(1, ge=1),
        page_size: int | None = Query(
            None, alias="pageSize", ge=1, le=FEED_MAX_PAGE_SIZE
        ),
        limit: int | None = Query(None, ge=1, le=FEED_MAX_PAGE_SIZE),
    ):
        """
        Search visible community posts.

        Query Parameters:
            q (str | None): Text matched against title and content.
            tags (str | None): Comma-separated tags, any of which must match.
            postType (str | None): Exact post type.
            author (str | None): Part of the author's full name.
            dateFrom (datetime | None): Earliest creation time, ISO-8601.
            dateTo (datetime | None): Latest creation time, ISO-8601.
            sortBy (str): relevance, newest, oldest, most_liked or most_commented.
            page (int): 1-based page number.
            pageSize (int | None): Results per page, 1 to 100. Defaults to 20.

        Returns:
            API response containing one page of scored posts.
        """
        async with self.database.session() as session:
            results = await self.feed_service.search_posts(
                session,
                query_text=q.strip() if q else None,
                tags=_split_tags(tags),
                post_type=post_type,
                sort_by=sort_by,
                page=page,
                page_size=_resolve_page_size(page_size, limit),
                author=author.strip() if author else None,
                date_from=date_from,
                date_to=date_to,
            )

        return api_response(message="Successfully searched posts.", data=results)

    async def filter_posts(
        self,
        tags: str | None = Query(None),
        post_type: str | None = Query(None, alias="postType"),
        author: str | None = Query(None),
        date_range: str | None = Query(None, alias="dateRange"),
        engagement_level: EngagementLevel | None = Query(
            None, alias="engagementLevel"
        ),
        page: int = Query(1, ge=1),
        page_size: int | None = Query(
            None, alias="pageSize", ge=1, le=FEED_MAX_PAGE_SIZE
        ),
        limit: int | None = Query(None, ge=1, le=FEED_MAX_PAGE_SIZE),
    ):
        """
        Browse visible community posts by structured filters, newest first.

        Query Parameters:
            tags (str | None): Comma-separated tags, any of which must match.
            postType (str | None): Exact post type.
            author (str | None): Exact full name of the author.
            dateRange (str | None): today, week, month, year or an ISO-8601 date.
            engagementLevel (str | None): low, medium, high or viral.
            page (int): 1-based page number.
            pageSize (int | None): Results per page, 1 to 100. Defaults to 20.

        Returns:
            API response containing one page of matching posts.
        """
        async with self.database.session() as session:
            results = await self.feed_service.filter_posts(
                session,
                tags=_split_tags(tags),
                post_type=post_type,
                author=author.strip() if author else None,
                date_range=date_range,
                engagement_level=engagement_level,
                page=page,
                page_size=_resolve_page_size(page_size, limit),
            )

        return api_response(message="Successfully filtered posts.", data=results)

    async def autocomplete(self, q: str | None = Query(None)):
        """
        Suggest post titles, authors and tags for partially typed text.

        Returns:
            API response containing the suggestions, empty for fewer than two characters.
        """
        async with self.database.session() as session:
            suggestions = await self.feed_service.autocomplete(session, q)

        return api_response(
            message="Successfully fetched suggestions.",
            data={"suggestions": suggestions},
        )

    async def get_trending_posts(self):
        """
        Retrieve the trending posts of the last seven days.

        Returns:
            API response containing up to ten posts with their trending scores.
        """
        async with self.database.session() as session:
            posts = await self.community_analytics_service.get_trending_posts(session)

        return api_response(
            message="Successfully fetched trending posts.", data={"posts": posts}
        )

    async def get_trending_tags(self):
        """
        Retrieve the most used tags of the last seven days.

        Returns:
            API response containing up to twenty tags with their counts.
        """
        async with self.database.session() as session:
            tags = await self.community_analytics_service.get_trending_tags(session)

        return api_response(message="Successfully fetched trending tags.", data=tags)

    async def get_feed_stats(self):
        async with self.database.session() as session:
            stats = await self.community_analytics_service.get_feed_stats(session)

        return api_response(message="Successfully fetched community stats.", data=stats)

    async def get_my_engagement(self, current_user: UserContextDto):
        """
        Retrieve the current user's engagement summary.

        Returns:
            API response containing posts created, likes and comments received
            and given, and the engagement score.
        """
        async with self.database.session() as session:
            engagement = await self.community_analytics_service.get_user_engagement(
                session, user_context=current_user
            )

        return api_response(
            message="Successfully fetched engagement summary.", data=engagement
        )
