from django.urls import path

from .views import (
    sessions_view,
    tweet_delete,
    tweets_collection,
    user_tweets,
)

urlpatterns = [
    # Твиты
    path("api/tweets", tweets_collection, name="tweets"),
    path("api/tweets/<int:pk>", tweet_delete, name="tweet_delete"),
    path("api/tweets/<int:pk>/delete", tweet_delete, name="tweet_delete_post"),

    # Лента конкретного пользователя
    path("api/users/<str:username>/tweets", user_tweets, name="user_tweets"),

    # Сессии (логин/логаут)
    path("api/sessions", sessions_view, name="sessions"),
]
