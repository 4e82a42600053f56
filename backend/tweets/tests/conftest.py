from __future__ import annotations

from unittest import mock

import pytest
from django.test import Client

from tweets.constants import SESSION_COOKIE_NAME
from tweets.models import Tweet, User, UserSession
from tweets.services.sessions import signed_token


@pytest.fixture(autouse=True)
def _fast_settings(settings, tmp_path):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    settings.MEDIA_ROOT = tmp_path / "media"
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"


@pytest.fixture(autouse=True)
def notifier():
    """Replace the background dispatch; tests inspect what would have been sent."""

    with mock.patch("tweets.services.notifications.dispatch") as dispatch:
        yield dispatch


def make_user(username: str, **kwargs) -> User:
    kwargs.setdefault("email", f"{username}@example.com")
    return User.objects.create_user(username=username, password="s3cret-pass", **kwargs)


def make_tweets(user: User, count: int, message: str = "Test Message") -> list[Tweet]:
    return [Tweet.objects.create(user=user, message=message) for _ in range(count)]


def login(client: Client, user: User) -> UserSession:
    session = UserSession.objects.create(user=user)
    client.cookies[SESSION_COOKIE_NAME] = signed_token(session.token)
    return session


@pytest.fixture
def user(db) -> User:
    return make_user("user_1")


@pytest.fixture
def other_user(db) -> User:
    return make_user("user_2")


@pytest.fixture
def auth_client(client, user) -> Client:
    login(client, user)
    return client
