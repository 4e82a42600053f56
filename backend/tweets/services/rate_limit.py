from __future__ import annotations

import threading
import weakref
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Iterator, Optional

from django.utils import timezone

from tweets.constants import RATE_LIMIT_MAX_TWEETS, RATE_LIMIT_WINDOW
from tweets.models import Tweet, User


class TweetRateLimiter:
    """
    Sliding-window limit on tweet creation.

    State is the user's own tweets: a user may hold at most ``limit`` tweets
    with ``created_at`` inside the trailing ``window``.
    """

    def __init__(self, *, limit: int = RATE_LIMIT_MAX_TWEETS, window: timedelta = RATE_LIMIT_WINDOW) -> None:
        self.limit = limit
        self.window = window
        # entries vanish once no request holds or waits on the lock
        self._locks: "weakref.WeakValueDictionary[int, threading.Lock]" = weakref.WeakValueDictionary()
        self._guard = threading.Lock()

    def count_in_window(self, user: User, *, now: Optional[datetime] = None) -> int:
        now = now or timezone.now()
        return Tweet.objects.filter(user=user, created_at__gt=now - self.window).count()

    def would_allow(self, user: User, *, now: Optional[datetime] = None) -> bool:
        """Read-only decision: True while the user is below the limit."""

        return self.count_in_window(user, now=now) < self.limit

    @contextmanager
    def serialized(self, user: User) -> Iterator[None]:
        """Hold the per-user lock so check and insert cannot interleave in this process."""

        with self._guard:
            lock = self._locks.get(user.pk)
            if lock is None:
                lock = threading.Lock()
                self._locks[user.pk] = lock
        with lock:
            yield


rate_limiter = TweetRateLimiter()
