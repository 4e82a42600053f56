from __future__ import annotations

from django.contrib.auth.forms import AuthenticationForm
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_http_methods

from .errors import InvalidInput, RateLimited, StorageFailure, Unauthenticated
from .services.sessions import close_session, open_session, resolve_session
from .services.tweets import create_tweet, delete_tweet, list_all, list_by_owner, serialize_tweet


def _error(kind: str, status: int, **extra) -> JsonResponse:
    return JsonResponse({"error": {"kind": kind, **extra}}, status=status)


# GET responses hand out the csrftoken cookie; clients echo it in X-CSRFToken on writes
@require_http_methods(["GET", "POST"])
@ensure_csrf_cookie
def tweets_collection(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return JsonResponse({"tweets": [serialize_tweet(t) for t in list_all()]})
    return _create(request)


def _create(request: HttpRequest) -> JsonResponse:
    user = resolve_session(request)

    try:
        tweet = create_tweet(
            user,
            request.POST.get("message", ""),
            request.FILES.get("image"),
        )
    except Unauthenticated:
        # neutral empty body; the status code carries the outcome
        return JsonResponse({}, status=401)
    except RateLimited as exc:
        return _error(exc.kind, 429, message=exc.message)
    except InvalidInput as exc:
        return _error(exc.kind, 400, fields=exc.fields)
    except StorageFailure as exc:
        return _error(exc.kind, 500, message=str(exc))

    return JsonResponse({"tweet": serialize_tweet(tweet)}, status=201)


@require_http_methods(["DELETE", "POST"])
def tweet_delete(request: HttpRequest, pk: int) -> JsonResponse:
    user = resolve_session(request)
    return JsonResponse({"success": delete_tweet(user, pk)})


@require_GET
@ensure_csrf_cookie
def user_tweets(request: HttpRequest, username: str) -> JsonResponse:
    tweets = list_by_owner(username)
    if tweets is None:
        return JsonResponse({"tweets": []}, status=404)
    return JsonResponse({"tweets": [serialize_tweet(t) for t in tweets]})


@require_http_methods(["POST", "DELETE"])
def sessions_view(request: HttpRequest) -> JsonResponse:
    if request.method == "DELETE":
        response = JsonResponse({"success": True})
        close_session(request, response)
        return response

    form = AuthenticationForm(request, data=request.POST)
    if not form.is_valid():
        errors = {field: list(messages) for field, messages in form.errors.items()}
        return JsonResponse({"success": False, "errors": errors}, status=400)

    user = form.get_user()
    response = JsonResponse({"success": True, "username": user.username})
    open_session(user, response)
    return response
