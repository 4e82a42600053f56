from __future__ import annotations

# tweets/forms.py
from django import forms

from .constants import TWEET_MESSAGE_MAX_LENGTH


class TweetForm(forms.Form):
    """Входящий твит: текст 1..140 символов + необязательная картинка."""

    # strip=False: длина считается по тексту как есть
    message = forms.CharField(
        max_length=TWEET_MESSAGE_MAX_LENGTH,
        strip=False,
        error_messages={"required": "Message can't be blank."},
    )
    image = forms.FileField(
        required=False,
        allow_empty_file=False,
        error_messages={"empty": "The submitted image is empty."},
    )

    def clean_message(self) -> str:
        message = self.cleaned_data.get("message") or ""
        if not message.strip():
            raise forms.ValidationError("Message can't be blank.")
        return message
