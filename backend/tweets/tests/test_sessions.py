import pytest
from django.test import RequestFactory
from django.urls import reverse

from tweets.constants import SESSION_COOKIE_NAME
from tweets.models import UserSession
from tweets.services.sessions import resolve_session, signed_token

from .conftest import login

pytestmark = pytest.mark.django_db

rf = RequestFactory()


def _request_with_cookie(value=None):
    request = rf.get("/")
    if value is not None:
        request.COOKIES[SESSION_COOKIE_NAME] = value
    return request


def test_resolve_returns_bound_user(user):
    session = UserSession.objects.create(user=user)

    assert resolve_session(_request_with_cookie(signed_token(session.token))) == user


def test_resolve_without_cookie_is_none():
    assert resolve_session(_request_with_cookie()) is None


def test_resolve_unsigned_token_is_none(user):
    session = UserSession.objects.create(user=user)

    assert resolve_session(_request_with_cookie(session.token)) is None


def test_resolve_unknown_token_is_none(user):
    assert resolve_session(_request_with_cookie(signed_token("no-such-token"))) is None


def test_resolve_does_not_create_sessions(user):
    resolve_session(_request_with_cookie(signed_token("no-such-token")))

    assert UserSession.objects.count() == 0


def test_resolve_ignores_inactive_user(user):
    session = UserSession.objects.create(user=user)
    user.is_active = False
    user.save()

    assert resolve_session(_request_with_cookie(signed_token(session.token))) is None


def test_login_sets_signed_cookie(client, user):
    response = client.post(reverse("sessions"), {"username": "user_1", "password": "s3cret-pass"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "username": "user_1"}
    session = UserSession.objects.get(user=user)
    assert client.cookies[SESSION_COOKIE_NAME].value == signed_token(session.token)


def test_login_with_wrong_password(client, user):
    response = client.post(reverse("sessions"), {"username": "user_1", "password": "nope"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert UserSession.objects.count() == 0


def test_logout_destroys_session(client, user):
    login(client, user)

    response = client.delete(reverse("sessions"))

    assert response.json() == {"success": True}
    assert UserSession.objects.count() == 0
