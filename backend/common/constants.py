TIME_OF_DAY_FORMAT = "%H:%M"
DEFAULT_MENTOR_TIMEZONE = "UTC"
UNKNOWN_LEARNER_NAME = "Unknown User"
MINUTES_PER_HOUR = 60

# Feed personalization
FEED_DEFAULT_PAGE_SIZE = 20
FEED_MAX_PAGE_SIZE = 100
RECENT_ENGAGEMENT_DAYS = 7
RECENT_ENGAGEMENT_LIMIT = 50
INTEREST_MATCH_MULTIPLIER = 1.5
RECENT_ENGAGEMENT_MULTIPLIER = 1.2
SIMILAR_POSTS_LIMIT = 10

# Audit log actions
AUDIT_SESSION_ACTION_TEMPLATE = "SESSION_{action}"
AUDIT_POST_ACTION_TEMPLATE = "POST_{action}"
SESSIONS_TABLE = "sessions"
COMMUNITY_POSTS_TABLE = "community_posts"

# Community analytics and discovery
TRENDING_WINDOW_DAYS = 7
TRENDING_POSTS_LIMIT = 10
TRENDING_TAGS_LIMIT = 20
LIKE_WEIGHT = 2
COMMENT_WEIGHT = 3
TITLE_MATCH_WEIGHT = 2
CONTENT_MATCH_WEIGHT = 1
RELEVANCE_COMMENT_WEIGHT = 0.5
AUTOCOMPLETE_MIN_QUERY_LENGTH = 2
AUTOCOMPLETE_LIMIT = 5
