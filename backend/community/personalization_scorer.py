from collections.abc import Iterable
from backend.common.constants import (
    INTEREST_MATCH_MULTIPLIER,
    RECENT_ENGAGEMENT_MULTIPLIER,
)
from backend.entity.community_posts_entity import CommunityPostsEntity


class PersonalizationScorer:
    """
    Scores and orders one page of feed candidates for a user.

    The base score of a post is its like count. It is multiplied by 1.5 when
    the post shares a tag with the user's interests and by 1.2 when it shares
    a tag with a post the user engaged with recently. Both multipliers may
    apply to the same post.
    """

    def score(
        self,
        post: CommunityPostsEntity,
        interest_tags: set[str],
        engaged_tags: set[str],
    ) -> float:
        post_tags = set(post.tags or [])
        score = float(post.likes_count or 0)

        if interest_tags & post_tags:
            score *= INTEREST_MATCH_MULTIPLIER
        if engaged_tags & post_tags:
            score *= RECENT_ENGAGEMENT_MULTIPLIER

        return score

    def rank(
        self,
        posts: list[CommunityPostsEntity],
        interest_tags: Iterable[str],
        engaged_tags: Iterable[str],
    ) -> list[tuple[CommunityPostsEntity, float]]:
        """
        Score posts and sort them by score, highest first.

        The sort is stable: equal scores keep the order the posts were given in.

        Args:
            posts (list[CommunityPostsEntity]): One page of candidates.
            interest_tags (Iterable[str]): The user's interest tags.
            engaged_tags (Iterable[str]): Tags of the user's recently engaged posts.

        Returns:
            list[tuple[CommunityPostsEntity, float]]: Posts paired with their scores.
        """
        interests = set(interest_tags)
        engaged = set(engaged_tags)

        scored = [(post, self.score(post, interests, engaged)) for post in posts]
        return sorted(scored, key=lambda pair: pair[1], reverse=True)
