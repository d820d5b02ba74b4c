import uuid
from datetime import datetime
from backend.entity.community_posts_entity import CommunityPostsEntity
from backend.entity.profiles_entity import ProfilesEntity
from backend.common.community_enums import (
    MODERATED_POST_STATUSES,
    PostStatus,
    SearchSortBy,
)
from sqlalchemy import func, select, or_
from sqlalchemy.ext.asyncio import AsyncSession


class CommunityPostsRepository:
    """
    Repository for handling database operations related to CommunityPostsEntity.
    """

    def _visible(self):
        return CommunityPostsEntity.status.not_in(MODERATED_POST_STATUSES)

    async def get_by_id(
        self, session: AsyncSession, post_id: uuid.UUID
    ) -> CommunityPostsEntity | None:
        """
        Retrieve a community post by ID, regardless of its moderation status.

        Args:
            session (AsyncSession): The active async database session.
            post_id (uuid.UUID): The ID of the post.

        Returns:
            CommunityPostsEntity | None: The matching post if found; otherwise None.
        """
        if not post_id:
            return None

        result = await session.execute(
            select(CommunityPostsEntity).where(CommunityPostsEntity.id == post_id)
        )

        return result.scalars().one_or_none()

    async def get_feed_candidates(
        self,
        session: AsyncSession,
        user_id: uuid.UUID,
        interest_tags: list[str],
        offset: int,
        limit: int,
    ) -> list[CommunityPostsEntity]:
        """
        Retrieve one page of feed candidates for a user, newest first.

        Candidates exclude the user's own posts and hidden or deleted posts.
        When the user has interest tags, only posts whose tags overlap them
        are returned.

        Args:
            session (AsyncSession): The active async database session.
            user_id (uuid.UUID): The user the feed is built for.
            interest_tags (list[str]): The user's interest tags, possibly empty.
            offset (int): Number of candidates to skip.
            limit (int): Maximum number of candidates to return.

        Returns:
            list[CommunityPostsEntity]: The candidate page ordered by created_at descending.
        """
        query = select(CommunityPostsEntity).where(
            CommunityPostsEntity.user_id != user_id,
            self._visible(),
        )

        if interest_tags:
            query = query.where(CommunityPostsEntity.tags.overlap(interest_tags))

        result = await session.execute(
            query.order_by(CommunityPostsEntity.created_at.desc())
            .offset(offset)
            .limit(limit)
        )

        return list(result.scalars().all())

    async def get_tags_by_post_ids(
        self, session: AsyncSession, post_ids: list[uuid.UUID]
    ) -> dict[uuid.UUID, list[str]]:
        """
        Retrieve the tag list of each given post.

        Args:
            session (AsyncSession): The active async database session.
            post_ids (list[uuid.UUID]): IDs of the posts to look up.

        Returns:
            dict[uuid.UUID, list[str]]: Post ID to tags. Unknown IDs are absent.
        """
        if not post_ids:
            return {}

        result = await session.execute(
            select(CommunityPostsEntity.id, CommunityPostsEntity.tags).where(
                CommunityPostsEntity.id.in_(post_ids)
            )
        )

        return {post_id: tags or [] for post_id, tags in result.all()}

    async def get_similar_posts(
        self,
        session: AsyncSession,
        anchor: CommunityPostsEntity,
        limit: int,
    ) -> list[CommunityPostsEntity]:
        """
        Retrieve visible posts sharing the anchor's post type or any of its tags.

        Args:
            session (AsyncSession): The active async database session.
            anchor (CommunityPostsEntity): The post to find neighbours for.
            limit (int): Maximum number of posts to return.

        Returns:
            list[CommunityPostsEntity]: Similar posts ordered by likes descending.
        """
        similarity = []
        if anchor.post_type:
            similarity.append(CommunityPostsEntity.post_type == anchor.post_type)
        if anchor.tags:
            similarity.append(CommunityPostsEntity.tags.overlap(anchor.tags))

        if not similarity:
            return []

        result = await session.execute(
            select(CommunityPostsEntity)
            .where(
                CommunityPostsEntity.id != anchor.id,
                self._visible(),
                or_(*similarity),
            )
            .order_by(CommunityPostsEntity.likes_count.desc())
            .limit(limit)
        )

        return list(result.scalars().all())

    def _authored_by(self, name_clause):
        return CommunityPostsEntity.user_id.in_(
            select(ProfilesEntity.id).where(name_clause)
        )

    async def search_posts(
        self,
        session: AsyncSession,
        query_text: str | None,
        tags: list[str] | None,
        post_type: str | None,
        sort_by: SearchSortBy,
        offset: int,
        limit: int,
        author: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[CommunityPostsEntity]:
        """
        Search visible posts by text, tags, post type, author and creation date.

        Text and author are matched as literal substrings: `%` and `_` in the
        input carry no wildcard meaning.

        Args:
            session (AsyncSession): The active async database session.
            query_text (str | None): Case-insensitive substring of title or content.
            tags (list[str] | None): Tags that must overlap the post's tags.
            post_type (str | None): Exact post type.
            sort_by (SearchSortBy): Result ordering. Relevance is fetched most
                liked first and re-scored by the caller.
            offset (int): Number of results to skip.
            limit (int): Maximum number of results.
            author (str | None): Case-insensitive substring of the author's full name.
            date_from (datetime | None): Inclusive lower bound on created_at.
            date_to (datetime | None): Inclusive upper bound on created_at.

        Returns:
            list[CommunityPostsEntity]: One page of matching posts.
        """
        query = select(CommunityPostsEntity).where(self._visible())

        if query_text:
            query = query.where(
                or_(
                    CommunityPostsEntity.title.icontains(query_text, autoescape=True),
                    CommunityPostsEntity.content.icontains(
                        query_text, autoescape=True
                    ),
                )
            )
        if tags:
            query = query.where(CommunityPostsEntity.tags.overlap(tags))
        if post_type:
            query = query.where(CommunityPostsEntity.post_type == post_type)
        if author:
            query = query.where(
                self._authored_by(
                    ProfilesEntity.full_name.icontains(author, autoescape=True)
                )
            )
        if date_from:
            query = query.where(CommunityPostsEntity.created_at >= date_from)
        if date_to:
            query = query.where(CommunityPostsEntity.created_at <= date_to)

        if sort_by == SearchSortBy.NEWEST:
            order = CommunityPostsEntity.created_at.desc()
        elif sort_by == SearchSortBy.OLDEST:
            order = CommunityPostsEntity.created_at.asc()
        elif sort_by == SearchSortBy.MOST_COMMENTED:
            order = CommunityPostsEntity.comments_count.desc()
        else:
            order = CommunityPostsEntity.likes_count.desc()

        result = await session.execute(query.order_by(order).offset(offset).limit(limit))

        return list(result.scalars().all())

    async def filter_posts(
        self,
        session: AsyncSession,
        tags: list[str] | None,
        post_type: str | None,
        author: str | None,
        created_since: datetime | None,
        min_likes: int,
        offset: int,
        limit: int,
    ) -> list[CommunityPostsEntity]:
        """
        Browse visible posts by structured filters, newest first.

        Args:
            session (AsyncSession): The active async database session.
            tags (list[str] | None): Tags that must overlap the post's tags.
            post_type (str | None): Exact post type.
            author (str | None): Exact full name of the author.
            created_since (datetime | None): Inclusive lower bound on created_at.
            min_likes (int): Minimum like count.
            offset (int): Number of results to skip.
            limit (int): Maximum number of results.

        Returns:
            list[CommunityPostsEntity]: One page of matching posts.
        """
        query = select(CommunityPostsEntity).where(self._visible())

        if tags:
            query = query.where(CommunityPostsEntity.tags.overlap(tags))
        if post_type:
            query = query.where(CommunityPostsEntity.post_type == post_type)
        if author:
            query = query.where(self._authored_by(ProfilesEntity.full_name == author))
        if created_since:
            query = query.where(CommunityPostsEntity.created_at >= created_since)
        if min_likes:
            query = query.where(CommunityPostsEntity.likes_count >= min_likes)

        result = await session.execute(
            query.order_by(CommunityPostsEntity.created_at.desc())
            .offset(offset)
            .limit(limit)
        )

        return list(result.scalars().all())

    async def get_trending_candidates(
        self, session: AsyncSession, since: datetime, limit: int
    ) -> list[CommunityPostsEntity]:
        """
        Retrieve the most liked visible posts created since a point in time.

        Args:
            session (AsyncSession): The active async database session.
            since (datetime): Inclusive lower bound on created_at.
            limit (int): Maximum number of posts.

        Returns:
            list[CommunityPostsEntity]: Posts ordered by likes descending.
        """
        result = await session.execute(
            select(CommunityPostsEntity)
            .where(self._visible(), CommunityPostsEntity.created_at >= since)
            .order_by(CommunityPostsEntity.likes_count.desc())
            .limit(limit)
        )

        return list(result.scalars().all())

    async def get_recent_tag_lists(
        self, session: AsyncSession, since: datetime
    ) -> list[list[str]]:
        """
        Retrieve the tag list of every visible post created since a point in time.

        Args:
            session (AsyncSession): The active async database session.
            since (datetime): Inclusive lower bound on created_at.

        Returns:
            list[list[str]]: One tag list per post, oldest post first.
        """
        result = await session.execute(
            select(CommunityPostsEntity.tags)
            .where(self._visible(), CommunityPostsEntity.created_at >= since)
            .order_by(CommunityPostsEntity.created_at.asc())
        )

        return [tags or [] for tags in result.scalars().all()]

    async def search_titles(
        self, session: AsyncSession, query_text: str, limit: int
    ) -> list[str]:
        """Titles of visible posts containing the text, case-insensitively."""
        result = await session.execute(
            select(CommunityPostsEntity.title)
            .where(
                self._visible(),
                CommunityPostsEntity.title.icontains(query_text, autoescape=True),
            )
            .order_by(CommunityPostsEntity.likes_count.desc())
            .limit(limit)
        )

        return list(result.scalars().all())

    async def search_tags(
        self, session: AsyncSession, query_text: str, limit: int
    ) -> list[str]:
        """Distinct tags of visible posts containing the text, case-insensitively."""
        tags = (
            select(func.unnest(CommunityPostsEntity.tags).label("tag"))
            .where(self._visible())
            .subquery()
        )
        result = await session.execute(
            select(tags.c.tag)
            .where(tags.c.tag.icontains(query_text, autoescape=True))
            .distinct()
            .order_by(tags.c.tag)
            .limit(limit)
        )

        return list(result.scalars().all())

    async def count_posts(self, session: AsyncSession) -> int:
        result = await session.execute(
            select(func.count()).select_from(CommunityPostsEntity)
        )
        return result.scalar_one()

    async def sum_likes(self, session: AsyncSession) -> int:
        result = await session.execute(
            select(func.coalesce(func.sum(CommunityPostsEntity.likes_count), 0))
        )
        return result.scalar_one()

    async def get_author_totals(
        self, session: AsyncSession, user_id: uuid.UUID
    ) -> tuple[int, int, int]:
        """
        Aggregate the posts a user wrote.

        Args:
            session (AsyncSession): The active async database session.
            user_id (uuid.UUID): The author.

        Returns:
            tuple[int, int, int]: Post count, likes received and comments received.
        """
        result = await session.execute(
            select(
                func.count(CommunityPostsEntity.id),
                func.coalesce(func.sum(CommunityPostsEntity.likes_count), 0),
                func.coalesce(func.sum(CommunityPostsEntity.comments_count), 0),
            ).where(CommunityPostsEntity.user_id == user_id)
        )
        posts, likes, comments = result.one()
        return posts, likes, comments

    async def count_by_status(
        self, session: AsyncSession, statuses: list[PostStatus]
    ) -> dict[PostStatus, int]:
        """
        Count posts per status for the given statuses.

        Args:
            session (AsyncSession): The active async database session.
            statuses (list[PostStatus]): Statuses to count.

        Returns:
            dict[PostStatus, int]: Status to count. Statuses without posts map to 0.
        """
        result = await session.execute(
            select(CommunityPostsEntity.status, func.count())
            .where(CommunityPostsEntity.status.in_(statuses))
            .group_by(CommunityPostsEntity.status)
        )
        counts = dict.fromkeys(statuses, 0)
        counts.update({status: count for status, count in result.all()})
        return counts

    async def update_moderation(
        self,
        session: AsyncSession,
        post: CommunityPostsEntity,
        moderated_at: datetime,
    ) -> CommunityPostsEntity:
        """
        Persist moderation fields already set on the post entity.

        Args:
            session (AsyncSession): The active async database session.
            post (CommunityPostsEntity): The post carrying the new status.
            moderated_at (datetime): Timestamp of the moderation decision.

        Returns:
            CommunityPostsEntity: The merged entity.
        """
        post.moderated_at = moderated_at
        merged_entity = await session.merge(post)
        await session.flush()

        return merged_entity
