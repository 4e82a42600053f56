from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.core import mail

from tweets.constants import FEED_GROUP_NAME
from tweets.consumers import FeedConsumer
from tweets.services import notifications

from .conftest import make_tweets, make_user

pytestmark = pytest.mark.django_db

REAL_DISPATCH = notifications.dispatch


@pytest.fixture
def tweet(user):
    return make_tweets(user, 1, message="hello world")[0]


def test_payload_is_plain_data(tweet):
    payload = notifications.build_payload(tweet)

    assert payload == {
        "type": "tweet_new",
        "tweet": {"id": tweet.id, "username": "user_1", "message": "hello world", "image": None},
        "email": "user_1@example.com",
    }


def test_deliver_mails_owner(tweet):
    notifications.deliver(notifications.build_payload(tweet))

    assert len(mail.outbox) == 1
    assert mail.outbox[0].to == ["user_1@example.com"]
    assert "hello world" in mail.outbox[0].body


def test_deliver_skips_mail_without_address():
    quiet = make_user("quiet", email="")
    tweet = make_tweets(quiet, 1)[0]

    notifications.deliver(notifications.build_payload(tweet))

    assert mail.outbox == []


def test_deliver_pushes_to_feed_group(tweet):
    layer = get_channel_layer()
    channel = async_to_sync(layer.new_channel)()
    async_to_sync(layer.group_add)(FEED_GROUP_NAME, channel)

    notifications.deliver(notifications.build_payload(tweet))

    event = async_to_sync(layer.receive)(channel)
    assert event["type"] == "notify"
    assert event["payload"]["tweet"]["id"] == tweet.id


def test_deliver_swallows_failures(tweet):
    with mock.patch.object(notifications, "send_mail", side_effect=ConnectionError("smtp down")):
        with mock.patch.object(notifications, "_push_to_feed") as push:
            notifications.deliver(notifications.build_payload(tweet))

    assert mail.outbox == []
    push.assert_called_once()


def test_dispatch_runs_in_background(tweet):
    future = REAL_DISPATCH(tweet)

    assert future.result(timeout=5) is None
    assert len(mail.outbox) == 1


def test_feed_consumer_forwards_events():
    async def scenario():
        communicator = WebsocketCommunicator(FeedConsumer.as_asgi(), "/ws/feed/")
        connected, _ = await communicator.connect()
        assert connected

        await get_channel_layer().group_send(
            FEED_GROUP_NAME,
            {"type": "notify", "payload": {"type": "tweet_new", "tweet": {"id": 7}}},
        )
        message = await communicator.receive_json_from()
        await communicator.disconnect()
        return message

    assert async_to_sync(scenario)() == {"type": "tweet_new", "tweet": {"id": 7}}
