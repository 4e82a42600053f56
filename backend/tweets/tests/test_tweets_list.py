from datetime import timedelta

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone

from tweets.models import Tweet
from tweets.services.tweets import create_tweet, list_all, list_by_owner

from .conftest import make_tweets

pytestmark = pytest.mark.django_db


def test_index_renders_all_tweets_newest_first(client, user):
    make_tweets(user, 2)
    ordered = list(Tweet.objects.order_by("-created_at", "-id"))

    response = client.get(reverse("tweets"))

    assert response.json() == {
        "tweets": [
            {"id": ordered[0].id, "username": user.username, "message": "Test Message", "image": None},
            {"id": ordered[1].id, "username": user.username, "message": "Test Message", "image": None},
        ]
    }


def test_list_all_orders_by_time_then_id(user, other_user):
    first, second, third = make_tweets(user, 3)
    now = timezone.now()
    Tweet.objects.filter(pk=first.pk).update(created_at=now)
    Tweet.objects.filter(pk=second.pk).update(created_at=now)
    Tweet.objects.filter(pk=third.pk).update(created_at=now - timedelta(minutes=5))
    newest = make_tweets(other_user, 1)[0]
    Tweet.objects.filter(pk=newest.pk).update(created_at=now + timedelta(minutes=1))

    assert [t.pk for t in list_all()] == [newest.pk, second.pk, first.pk, third.pk]


def test_index_by_user_filters_owner(client, user, other_user):
    tweet_1 = make_tweets(user, 1)[0]
    make_tweets(other_user, 1)

    response = client.get(reverse("user_tweets", kwargs={"username": user.username}))

    assert response.json() == {
        "tweets": [
            {"id": tweet_1.id, "username": "user_1", "message": "Test Message", "image": None},
        ]
    }


def test_index_by_user_with_images(client, user, other_user):
    create_tweet(user, "Test Message", SimpleUploadedFile("test.png", b"png-bytes"))
    create_tweet(other_user, "Test Message", SimpleUploadedFile("test.png", b"png-bytes"))

    response = client.get(reverse("user_tweets", kwargs={"username": user.username}))

    tweets = response.json()["tweets"]
    assert len(tweets) == 1
    assert "test.png" in tweets[0]["image"]


def test_list_by_owner_keeps_creation_order(user, other_user):
    mine = make_tweets(user, 3)
    make_tweets(other_user, 2)

    assert [t.pk for t in list_by_owner(user.username)] == [t.pk for t in mine]


def test_unknown_user(client):
    response = client.get(reverse("user_tweets", kwargs={"username": "ghost"}))

    assert response.status_code == 404
    assert response.json() == {"tweets": []}
    assert list_by_owner("ghost") is None
