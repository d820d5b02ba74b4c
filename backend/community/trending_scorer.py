from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from backend.common.constants import (
    COMMENT_WEIGHT,
    CONTENT_MATCH_WEIGHT,
    LIKE_WEIGHT,
    RELEVANCE_COMMENT_WEIGHT,
    TITLE_MATCH_WEIGHT,
    TRENDING_TAGS_LIMIT,
    TRENDING_WINDOW_DAYS,
)
from backend.entity.community_posts_entity import CommunityPostsEntity

SECONDS_PER_DAY = 24 * 60 * 60


class TrendingScorer:
    """
    Engagement, trending and search relevance scores for community posts.

    engagement = likes * 2 + comments * 3
    trending   = engagement * (1 + max(0, 7 - age_in_days) / 7)
    relevance  = 2 if the title contains the query
                 + 1 if the content contains the query
                 + likes + comments * 0.5

    Every ranking sorts highest first and is stable.
    """

    def engagement_score(self, likes: int | None, comments: int | None) -> int:
        return (likes or 0) * LIKE_WEIGHT + (comments or 0) * COMMENT_WEIGHT

    def trending_score(self, post: CommunityPostsEntity, now: datetime) -> float:
        engagement = self.engagement_score(post.likes_count, post.comments_count)
        if post.created_at is None:
            return float(engagement)

        age_days = (now - post.created_at).total_seconds() / SECONDS_PER_DAY
        recency = max(0.0, TRENDING_WINDOW_DAYS - age_days)
        return engagement * (1 + recency / TRENDING_WINDOW_DAYS)

    def rank_trending(
        self, posts: list[CommunityPostsEntity], now: datetime
    ) -> list[tuple[CommunityPostsEntity, float]]:
        scored = [(post, self.trending_score(post, now)) for post in posts]
        return sorted(scored, key=lambda pair: pair[1], reverse=True)

    def relevance_score(
        self, post: CommunityPostsEntity, query_text: str | None
    ) -> float:
        score = 0.0
        if query_text:
            needle = query_text.lower()
            if needle in (post.title or "").lower():
                score += TITLE_MATCH_WEIGHT
            if needle in (post.content or "").lower():
                score += CONTENT_MATCH_WEIGHT

        score += post.likes_count or 0
        score += (post.comments_count or 0) * RELEVANCE_COMMENT_WEIGHT
        return score

    def rank_by_relevance(
        self,
        posts: list[CommunityPostsEntity],
        query_text: str | None,
        reorder: bool = True,
    ) -> list[tuple[CommunityPostsEntity, float]]:
        """
        Pair each post with its relevance score.

        Args:
            posts (list[CommunityPostsEntity]): One page of search results.
            query_text (str | None): The search text, matched case-insensitively.
            reorder (bool): Sort by score when True, otherwise keep the given order.

        Returns:
            list[tuple[CommunityPostsEntity, float]]: Posts paired with their scores.
        """
        scored = [(post, self.relevance_score(post, query_text)) for post in posts]
        if not reorder:
            return scored
        return sorted(scored, key=lambda pair: pair[1], reverse=True)

    def count_tags(
        self, tag_lists: Iterable[list[str]], limit: int = TRENDING_TAGS_LIMIT
    ) -> list[tuple[str, int]]:
        """
        Count how many posts carry each tag and keep the most frequent.

        Ties keep the order in which the tags were first seen.

        Args:
            tag_lists (Iterable[list[str]]): One tag list per post.
            limit (int): Maximum number of tags returned.

        Returns:
            list[tuple[str, int]]: (tag, count) pairs, most frequent first.
        """
        counts = Counter()
        for tags in tag_lists:
            counts.update(tags or [])
        return counts.most_common(limit)
