from enum import Enum


class PostStatus(str, Enum):
    PUBLISHED = "published"
    APPROVED = "approved"
    HIDDEN = "hidden"
    DELETED = "deleted"


# Posts in these states are never feed, search or similar-post candidates.
MODERATED_POST_STATUSES = [PostStatus.HIDDEN, PostStatus.DELETED]


class ModerationAction(str, Enum):
    APPROVE = "approve"
    HIDE = "hide"
    DELETE = "delete"


MODERATION_ACTION_TO_STATUS = {
    ModerationAction.APPROVE: PostStatus.APPROVED,
    ModerationAction.HIDE: PostStatus.HIDDEN,
    ModerationAction.DELETE: PostStatus.DELETED,
}


class ReportStatus(str, Enum):
    PENDING = "pending"
    APPROVE = "approve"
    HIDE = "hide"
    DELETE = "delete"


class SearchSortBy(str, Enum):
    RELEVANCE = "relevance"
    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_LIKED = "most_liked"
    MOST_COMMENTED = "most_commented"


class DateRange(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class EngagementLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VIRAL = "viral"


# Minimum like count for each engagement level.
ENGAGEMENT_LEVEL_MIN_LIKES = {
    EngagementLevel.LOW: 0,
    EngagementLevel.MEDIUM: 5,
    EngagementLevel.HIGH: 20,
    EngagementLevel.VIRAL: 100,
}

# Rolling windows in days. TODAY starts at midnight UTC instead.
DATE_RANGE_DAYS = {
    DateRange.WEEK: 7,
    DateRange.MONTH: 30,
    DateRange.YEAR: 365,
}


class EngagementActionType(str, Enum):
    LIKE = "like"
    COMMENT = "comment"
