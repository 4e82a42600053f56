"""Project-level constants shared across backend code.

Keep limits here so validation (forms), the rate limiter and error messages stay consistent.
"""

from datetime import timedelta

# Maximum characters in one tweet
TWEET_MESSAGE_MAX_LENGTH = 140

# At most RATE_LIMIT_MAX_TWEETS tweets per user within the trailing RATE_LIMIT_WINDOW
RATE_LIMIT_MAX_TWEETS = 30
RATE_LIMIT_WINDOW = timedelta(minutes=60)
RATE_LIMIT_MESSAGE = (
    f"Rate limit exceeded ({RATE_LIMIT_MAX_TWEETS} tweets/hour). Please try again later."
)

# Signed cookie carrying the opaque session token
SESSION_COOKIE_NAME = "twitter_session_token"

# Channels group receiving live tweet events
FEED_GROUP_NAME = "feed"
