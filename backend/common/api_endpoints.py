HEALTH_ENDPOINT = "/health"
MY_IDENTITY_ENDPOINT = "/me"

MENTORSHIP_BOOKINGS_ENDPOINT = "/mentorship/bookings"
MENTORSHIP_SESSION_ACTIONS_ENDPOINT = "/mentorship/sessions/{session_id}/actions"
MENTORSHIP_MENTOR_AVAILABILITY_ENDPOINT = "/mentorship/mentors/{mentor_id}/availability"

COMMUNITY_FEED_ENDPOINT = "/community/feed"
COMMUNITY_ENGAGEMENT_ENDPOINT = "/community/engagement"
COMMUNITY_SIMILAR_POSTS_ENDPOINT = "/community/posts/{post_id}/similar"
COMMUNITY_READING_PROGRESS_ENDPOINT = "/community/reading-progress"
COMMUNITY_SEARCH_ENDPOINT = "/community/posts/search"
COMMUNITY_REPORT_POST_ENDPOINT = "/community/posts/{post_id}/reports"
COMMUNITY_MODERATE_POST_ENDPOINT = "/community/posts/{post_id}/moderation"
COMMUNITY_FILTER_ENDPOINT = "/community/posts/filter"
COMMUNITY_TRENDING_POSTS_ENDPOINT = "/community/posts/trending"
COMMUNITY_TRENDING_TAGS_ENDPOINT = "/community/tags/trending"
COMMUNITY_AUTOCOMPLETE_ENDPOINT = "/community/search/autocomplete"
COMMUNITY_STATS_ENDPOINT = "/community/stats"
COMMUNITY_MY_ENGAGEMENT_ENDPOINT = "/community/engagement/me"
COMMUNITY_REPORTED_POSTS_ENDPOINT = "/community/moderation/reports"
COMMUNITY_MODERATION_STATS_ENDPOINT = "/community/moderation/stats"
