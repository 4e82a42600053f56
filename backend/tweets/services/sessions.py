from __future__ import annotations

import logging
from typing import Optional

from django.core import signing
from django.http import HttpRequest, HttpResponse

from tweets.constants import SESSION_COOKIE_NAME
from tweets.models import User, UserSession

logger = logging.getLogger(__name__)


def read_session_token(request: HttpRequest) -> Optional[str]:
    """Token from the signed cookie; tampered or missing cookies give None."""

    return request.get_signed_cookie(SESSION_COOKIE_NAME, default=None)


def resolve_session(request: HttpRequest) -> Optional[User]:
    """Return the user bound to the request's session token, or None.

    Read-only lookup: never creates a session. Call once per request and pass
    the result down explicitly.
    """

    token = read_session_token(request)
    if not token:
        return None

    session = (
        UserSession.objects.select_related("user")
        .filter(token=token, user__is_active=True)
        .first()
    )
    if session is None:
        return None
    return session.user


def open_session(user: User, response: HttpResponse) -> UserSession:
    session = UserSession.objects.create(user=user)
    response.set_signed_cookie(SESSION_COOKIE_NAME, session.token, httponly=True, samesite="Lax")
    logger.info("session opened for user %s", user.pk)
    return session


def close_session(request: HttpRequest, response: HttpResponse) -> bool:
    token = read_session_token(request)
    response.delete_cookie(SESSION_COOKIE_NAME)
    if not token:
        return False

    deleted, _ = UserSession.objects.filter(token=token).delete()
    return bool(deleted)


def signed_token(token: str) -> str:
    """Cookie value for a raw token, as ``set_signed_cookie`` would write it."""

    return signing.get_cookie_signer(salt=SESSION_COOKIE_NAME).sign(token)
