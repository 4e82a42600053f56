# tweets/models.py
import logging
import secrets
from functools import partial

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models, transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from .constants import TWEET_MESSAGE_MAX_LENGTH

logger = logging.getLogger(__name__)


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


class User(AbstractUser):
    # handle — это username (унаследован от AbstractUser), уникален и не меняется

    def __str__(self):
        return self.username


class UserSession(models.Model):
    """Непрозрачный токен, привязанный к одному пользователю.

    Создаётся при логине, удаляется при логауте. Обработка запросов только читает его.
    """

    token = models.CharField("Токен", max_length=64, unique=True, default=new_session_token)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sessions",
        verbose_name="Пользователь",
    )
    created_at = models.DateTimeField("Создано", auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Session({self.user_id})"


class Tweet(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="tweets",
        verbose_name="Автор",
    )
    message = models.CharField("Текст", max_length=TWEET_MESSAGE_MAX_LENGTH)
    # Хранится как есть, без проверки содержимого
    image = models.FileField("Картинка", upload_to="tweets/", blank=True)
    created_at = models.DateTimeField("Создано", auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="tweet_user_created_idx"),
        ]

    def __str__(self):
        return f"{self.user}: {self.message[:30]}"

    @property
    def image_url(self):
        return self.image.url if self.image else None


def _remove_image_file(storage, name: str) -> None:
    try:
        storage.delete(name)
    except OSError:
        logger.exception("could not remove image file %s", name)


# Срабатывает и при delete(), и при каскаде/bulk delete (удаление пользователя).
# Файл убираем только после коммита: при откате строка остаётся вместе с картинкой.
@receiver(post_delete, sender=Tweet)
def delete_tweet_image_file(sender, instance, **kwargs):
    if instance.image:
        transaction.on_commit(partial(_remove_image_file, instance.image.storage, instance.image.name))
