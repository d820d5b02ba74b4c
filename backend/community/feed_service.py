import uuid
from datetime import datetime, timedelta, timezone
from dateutil.parser import isoparse
from sqlalchemy.ext.asyncio import AsyncSession
from backend.common.community_enums import (
    DATE_RANGE_DAYS,
    ENGAGEMENT_LEVEL_MIN_LIKES,
    MODERATED_POST_STATUSES,
    DateRange,
    EngagementLevel,
    SearchSortBy,
)
from backend.common.constants import (
    AUTOCOMPLETE_LIMIT,
    AUTOCOMPLETE_MIN_QUERY_LENGTH,
    RECENT_ENGAGEMENT_DAYS,
    RECENT_ENGAGEMENT_LIMIT,
    SIMILAR_POSTS_LIMIT,
)
from backend.common.service_errors import InvalidInputError, NotFoundError
from backend.dto.community_analytics_dto import AutocompleteDto, SuggestionDto
from backend.dto.post_dto import (
    FeedDto,
    PostFilterDto,
    PostSearchDto,
    SimilarPostsDto,
)
from backend.dto.user_context_dto import UserContextDto


class FeedService:
    """
    Service for reading community posts: the personalized feed, similar posts,
    search, structured filtering and search suggestions.
    """

    def __init__(
        self,
        logger,
        community_posts_repository,
        user_interests_repository,
        user_engagement_repository,
        profiles_repository,
        personalization_scorer,
        trending_scorer,
        community_mapper,
        date_time_util,
    ):
        """
        Initializes the FeedService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            community_posts_repository (CommunityPostsRepository): Access to posts.
            user_interests_repository (UserInterestsRepository): Access to user interests.
            user_engagement_repository (UserEngagementRepository): Access to engagement events.
            profiles_repository (ProfilesRepository): Author name suggestions.
            personalization_scorer (PersonalizationScorer): Scores a page of posts.
            trending_scorer (TrendingScorer): Search relevance scores.
            community_mapper (CommunityMapper): Converts entities to DTOs.
            date_time_util (DateTimeUtil): Clock helper.
        """
        self.logger = logger
        self.community_posts_repository = community_posts_repository
        self.user_interests_repository = user_interests_repository
        self.user_engagement_repository = user_engagement_repository
        self.profiles_repository = profiles_repository
        self.personalization_scorer = personalization_scorer
        self.trending_scorer = trending_scorer
        self.community_mapper = community_mapper
        self.date_time_util = date_time_util

    async def _get_recent_engaged_tags(
        self, session: AsyncSession, user_id: uuid.UUID
    ) -> set[str]:
        since = self.date_time_util.now_utc() - timedelta(days=RECENT_ENGAGEMENT_DAYS)
        events = await self.user_engagement_repository.get_recent_by_user_id(
            session, user_id=user_id, since=since, limit=RECENT_ENGAGEMENT_LIMIT
        )
        post_ids = list(dict.fromkeys(event.post_id for event in events))
        tags_by_post = await self.community_posts_repository.get_tags_by_post_ids(
            session, post_ids
        )
        return {tag for tags in tags_by_post.values() for tag in tags}

    async def get_personalized_feed(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        page: int,
        page_size: int,
    ) -> FeedDto:
        """
        Build one page of the user's personalized feed.

        This method:
        1. Loads the user's interests and the tags of recently engaged posts.
        2. Fetches the page window of candidates, newest first. When the user
           has interest tags, only posts overlapping them are candidates.
        3. Scores and re-orders the page. Ordering never crosses page borders,
           so a high-scoring older post does not move to an earlier page.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The authenticated user.
            page (int): 1-based page number.
            page_size (int): Number of posts per page.

        Returns:
            FeedDto: The scored page and whether another page may exist.
        """
        user_id = user_context.user_id

        interests = await self.user_interests_repository.get_by_user_id(
            session, user_id
        )
        interest_tags = list(interests.tags or []) if interests else []
        engaged_tags = await self._get_recent_engaged_tags(session, user_id)

        candidates = await self.community_posts_repository.get_feed_candidates(
            session,
            user_id=user_id,
            interest_tags=interest_tags,
            offset=(page - 1) * page_size,
            limit=page_size,
        )

        ranked = self.personalization_scorer.rank(
            candidates, interest_tags, engaged_tags
        )

        self.logger.debug(
            "[FeedService] feed page %s for %s: %s posts, %s interest tags, %s engaged tags",
            page,
            user_context.sub,
            len(ranked),
            len(interest_tags),
            len(engaged_tags),
        )

        return FeedDto(
            posts=[
                self.community_mapper.map_to_scored_post_dto(post, score)
                for post, score in ranked
            ],
            page=page,
            page_size=page_size,
            has_more=len(candidates) == page_size,
        )

    async def get_similar_posts(
        self, session: AsyncSession, post_id: uuid.UUID
    ) -> SimilarPostsDto:
        """
        Find posts similar to the given one.

        Args:
            session (AsyncSession): Active database async session.
            post_id (uuid.UUID): The anchor post.

        Returns:
            SimilarPostsDto: Up to ten visible posts sharing the anchor's type or a tag,
            most liked first, together with the anchor itself.

        Raises:
            NotFoundError: If the anchor post does not exist or was moderated away.
        """
        anchor = await self.community_posts_repository.get_by_id(session, post_id)
        if not anchor or anchor.status in MODERATED_POST_STATUSES:
            raise NotFoundError("Post not found")

        similar = await self.community_posts_repository.get_similar_posts(
            session, anchor=anchor, limit=SIMILAR_POSTS_LIMIT
        )

        return SimilarPostsDto(
            posts=self.community_mapper.map_to_post_dtos(similar),
            original_post=self.community_mapper.map_to_post_dto(anchor),
        )

    async def search_posts(
        self,
        session: AsyncSession,
        query_text: str | None,
        tags: list[str] | None,
        post_type: str | None,
        sort_by: SearchSortBy,
        page: int,
        page_size: int,
        author: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> PostSearchDto:
        """
        Search visible posts and attach a relevance score to each result.

        The page is fetched in the requested order. For relevance ordering the
        page is fetched most liked first and then re-ordered by relevance score;
        like the feed, re-ordering never crosses page borders.

        Args:
            session (AsyncSession): Active database async session.
            query_text (str | None): Case-insensitive text matched against title and content.
            tags (list[str] | None): Tags that must overlap the post's tags.
            post_type (str | None): Exact post type.
            sort_by (SearchSortBy): Result ordering.
            page (int): 1-based page number.
            page_size (int): Number of posts per page.
            author (str | None): Case-insensitive part of the author's full name.
            date_from (datetime | None): Earliest creation time.
            date_to (datetime | None): Latest creation time.

        Returns:
            PostSearchDto: One page of scored posts.

        Raises:
            InvalidInputError: If date_from is after date_to.
        """
        if date_from and date_to and date_from > date_to:
            raise InvalidInputError("dateFrom must not be after dateTo")

        posts = await self.community_posts_repository.search_posts(
            session,
            query_text=query_text,
            tags=tags,
            post_type=post_type,
            sort_by=sort_by,
            offset=(page - 1) * page_size,
            limit=page_size,
            author=author,
            date_from=date_from,
            date_to=date_to,
        )

        scored = self.trending_scorer.rank_by_relevance(
            posts, query_text, reorder=sort_by == SearchSortBy.RELEVANCE
        )

        return PostSearchDto(
            posts=[
                self.community_mapper.map_to_search_result_dto(post, score)
                for post, score in scored
            ],
            page=page,
            page_size=page_size,
            has_more=len(posts) == page_size,
            total_results=len(posts),
        )

    def _resolve_date_range(self, date_range: str | None) -> datetime | None:
        if not date_range:
            return None

        now = self.date_time_util.now_utc()
        if date_range == DateRange.TODAY:
            return now.replace(hour=0, minute=0, second=0, microsecond=0)
        if date_range in (DateRange.WEEK, DateRange.MONTH, DateRange.YEAR):
            return now - timedelta(days=DATE_RANGE_DAYS[DateRange(date_range)])

        try:
            since = isoparse(date_range)
        except ValueError as e:
            raise InvalidInputError(f"Invalid dateRange: {date_range}") from e
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        return since

    async def filter_posts(
        self,
        session: AsyncSession,
        tags: list[str] | None,
        post_type: str | None,
        author: str | None,
        date_range: str | None,
        engagement_level: EngagementLevel | None,
        page: int,
        page_size: int,
    ) -> PostFilterDto:
        """
        Browse visible posts by structured filters, newest first.

        Args:
            session (AsyncSession): Active database async session.
            tags (list[str] | None): Tags that must overlap the post's tags.
            post_type (str | None): Exact post type.
            author (str | None): Exact full name of the author.
            date_range (str | None): "today" (since midnight UTC), "week", "month",
                "year" (the last 7, 30 or 365 days) or an ISO-8601 start date.
            engagement_level (EngagementLevel | None): Minimum like bracket.
            page (int): 1-based page number.
            page_size (int): Number of posts per page.

        Returns:
            PostFilterDto: One page of matching posts.

        Raises:
            InvalidInputError: If date_range is neither a known range nor a date.
        """
        created_since = self._resolve_date_range(date_range)
        min_likes = (
            ENGAGEMENT_LEVEL_MIN_LIKES[engagement_level] if engagement_level else 0
        )

        posts = await self.community_posts_repository.filter_posts(
            session,
            tags=tags,
            post_type=post_type,
            author=author,
            created_since=created_since,
            min_likes=min_likes,
            offset=(page - 1) * page_size,
            limit=page_size,
        )

        return PostFilterDto(
            posts=self.community_mapper.map_to_post_dtos(posts),
            page=page,
            page_size=page_size,
            has_more=len(posts) == page_size,
        )

    async def autocomplete(
        self, session: AsyncSession, query_text: str | None
    ) -> AutocompleteDto:
        """
        Suggest post titles, author names and tags containing the typed text.

        Queries shorter than two characters return no suggestions.

        Args:
            session (AsyncSession): Active database async session.
            query_text (str | None): The text typed so far.

        Returns:
            AutocompleteDto: Up to five suggestions of each kind.
        """
        if not query_text or len(query_text) < AUTOCOMPLETE_MIN_QUERY_LENGTH:
            return AutocompleteDto()

        titles = await self.community_posts_repository.search_titles(
            session, query_text, limit=AUTOCOMPLETE_LIMIT
        )
        names = await self.profiles_repository.search_names(
            session, query_text, limit=AUTOCOMPLETE_LIMIT
        )
        tags = await self.community_posts_repository.search_tags(
            session, query_text, limit=AUTOCOMPLETE_LIMIT
        )

        return AutocompleteDto(
            posts=[SuggestionDto(type="post", value=title) for title in titles],
            authors=[SuggestionDto(type="author", value=name) for name in names],
            tags=[SuggestionDto(type="tag", value=tag) for tag in tags],
        )
