from __future__ import annotations

import logging
from functools import partial
from typing import Any, Dict, List, Optional, Union

from django.core.files import File
from django.core.files.base import ContentFile
from django.db import DatabaseError, transaction
from django.db.models import QuerySet

from tweets.errors import InvalidInput, RateLimited, StorageFailure, Unauthenticated
from tweets.forms import TweetForm
from tweets.models import Tweet, User
from tweets.services import notifications
from tweets.services.attachments import discard_attachment, store_attachment
from tweets.services.rate_limit import TweetRateLimiter, rate_limiter

logger = logging.getLogger(__name__)


def serialize_tweet(tweet: Tweet) -> Dict[str, Any]:
    return {
        "id": tweet.id,
        "username": tweet.user.username,
        "message": tweet.message,
        "image": tweet.image_url,
    }


def _validate(message: Any, image: Optional[File]) -> Dict[str, Any]:
    files = {"image": image} if image is not None else {}
    form = TweetForm(data={"message": message}, files=files)
    if not form.is_valid():
        raise InvalidInput({field: list(errors) for field, errors in form.errors.items()})
    return form.cleaned_data


def _notify(tweet: Tweet) -> None:
    try:
        notifications.dispatch(tweet)
    except Exception:
        logger.exception("could not dispatch notifications for tweet %s", tweet.pk)


def create_tweet(
    user: Optional[User],
    message: Any,
    image: Union[File, bytes, None] = None,
    *,
    limiter: TweetRateLimiter = rate_limiter,
) -> Tweet:
    """Run the creation pipeline for an already resolved identity.

    Steps: authenticate -> rate check -> validate -> persist (tweet + image)
    -> notify. Rejections raise ``TweetError`` subclasses and leave nothing
    behind; notification problems never reach the caller.
    """

    if user is None:
        raise Unauthenticated("no session")

    if not limiter.would_allow(user):
        logger.info("rate limit hit for user %s", user.pk)
        raise RateLimited()

    if isinstance(image, (bytes, bytearray)):
        image = ContentFile(bytes(image), name="image")

    cleaned = _validate(message, image)
    upload = cleaned.get("image")

    stored_name: Optional[str] = None
    try:
        with limiter.serialized(user), transaction.atomic():
            # owner row lock; the window is counted again under it
            User.objects.select_for_update().get(pk=user.pk)
            if not limiter.would_allow(user):
                logger.info("rate limit hit for user %s (re-check)", user.pk)
                raise RateLimited()

            tweet = Tweet(user=user, message=cleaned["message"])
            if upload is not None:
                stored_name = store_attachment(upload)
                tweet.image.name = stored_name
            tweet.save()
    except (DatabaseError, OSError) as exc:
        if stored_name:
            discard_attachment(stored_name)
        logger.exception("could not store tweet for user %s", user.pk)
        raise StorageFailure("Could not save tweet.") from exc

    logger.info("tweet %s created by user %s", tweet.pk, user.pk)

    # waits for the outermost commit; a rolled back tweet notifies nobody
    transaction.on_commit(partial(_notify, tweet))

    return tweet


def delete_tweet(user: Optional[User], tweet_id: Any) -> bool:
    """Delete the tweet if ``user`` owns it.

    Returns False for no session, unknown tweet and foreign tweet alike.
    """

    if user is None:
        return False

    try:
        tweet_pk = int(tweet_id)
    except (TypeError, ValueError):
        return False

    tweet = Tweet.objects.filter(pk=tweet_pk).first()
    if tweet is None or tweet.user_id != user.pk:
        return False

    try:
        tweet.delete()
    except DatabaseError:
        logger.exception("could not delete tweet %s", tweet_pk)
        return False

    logger.info("tweet %s deleted by user %s", tweet_pk, user.pk)
    return True


def list_all() -> QuerySet:
    """All tweets, newest first; equal timestamps fall back to id."""

    return Tweet.objects.select_related("user").order_by("-created_at", "-id")


def list_by_owner(username: str) -> Optional[List[Tweet]]:
    """Tweets of one user in their natural (creation) order, or None for an unknown handle."""

    owner = User.objects.filter(username=username).first()
    if owner is None:
        return None
    return list(owner.tweets.select_related("user").order_by("id"))
