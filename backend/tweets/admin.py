from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User, UserSession, Tweet


# ========= Пользователь =========

@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "is_staff", "is_superuser")
    search_fields = ("username", "email")


# ========= Твиты =========

@admin.register(Tweet)
class TweetAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "short_message", "image", "created_at")
    list_filter = ("created_at",)
    search_fields = ("message", "user__username")

    def short_message(self, obj):
        return (obj.message[:50] + "…") if len(obj.message) > 50 else obj.message

    short_message.short_description = "Текст"


# ========= Сессии =========

@admin.register(UserSession)
class UserSessionAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "created_at")
    search_fields = ("user__username",)
    readonly_fields = ("token",)
