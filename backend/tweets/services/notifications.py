from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.core.mail import send_mail

from tweets.constants import FEED_GROUP_NAME
from tweets.models import Tweet

logger = logging.getLogger(__name__)

_executor: Optional[ThreadPoolExecutor] = None


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(
            max_workers=getattr(settings, "CHIRP_NOTIFIER_WORKERS", 2),
            thread_name_prefix="tweet-notifier",
        )
    return _executor


def build_payload(tweet: Tweet) -> Dict[str, Any]:
    """Plain data for the worker thread; no ORM access happens off the request thread."""

    return {
        "type": "tweet_new",
        "tweet": {
            "id": tweet.id,
            "username": tweet.user.username,
            "message": tweet.message,
            "image": tweet.image_url,
        },
        "email": tweet.user.email,
    }


def _send_email(payload: Dict[str, Any]) -> None:
    email = payload.get("email")
    if not email:
        return

    tweet = payload["tweet"]
    send_mail(
        subject="Your tweet was posted",
        message=f"@{tweet['username']}: {tweet['message']}",
        from_email=getattr(settings, "CHIRP_EMAIL_FROM", None),
        recipient_list=[email],
    )


def _push_to_feed(payload: Dict[str, Any]) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return

    async_to_sync(channel_layer.group_send)(
        FEED_GROUP_NAME,
        {
            "type": "notify",
            "payload": {"type": payload["type"], "tweet": payload["tweet"]},
        },
    )


def deliver(payload: Dict[str, Any]) -> None:
    """Run every notification channel; failures are logged, never raised."""

    for step in (_send_email, _push_to_feed):
        try:
            step(payload)
        except Exception:
            logger.exception("tweet notification step %s failed for tweet %s", step.__name__, payload["tweet"]["id"])


def dispatch(tweet: Tweet) -> Future:
    """Fire-and-forget: hand the payload to a background thread and return at once."""

    return _get_executor().submit(deliver, build_payload(tweet))
