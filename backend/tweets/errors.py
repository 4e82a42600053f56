from __future__ import annotations

from typing import Dict, List

from .constants import RATE_LIMIT_MESSAGE


class TweetError(Exception):
    """Base error for the tweet pipeline; views turn it into a JSON error body."""

    kind = "error"


class Unauthenticated(TweetError):
    kind = "unauthenticated"


class RateLimited(TweetError):
    kind = "rate_limited"

    def __init__(self, message: str = RATE_LIMIT_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(TweetError):
    kind = "invalid"

    def __init__(self, fields: Dict[str, List[str]]) -> None:
        super().__init__("invalid input")
        self.fields = fields


class StorageFailure(TweetError):
    kind = "storage"
