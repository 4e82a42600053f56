from __future__ import annotations

import logging
import os

from django.core.files import File
from django.core.files.storage import Storage
from django.utils.text import get_valid_filename

from tweets.models import Tweet

logger = logging.getLogger(__name__)

UPLOAD_DIR = "tweets"


def _storage() -> Storage:
    return Tweet._meta.get_field("image").storage


def store_attachment(upload: File) -> str:
    """Write the blob to storage and return its stored name (a stable reference)."""

    base = get_valid_filename(os.path.basename(upload.name or "")) or "image"
    name = _storage().save(f"{UPLOAD_DIR}/{base}", upload)
    logger.debug("attachment stored as %s", name)
    return name


def discard_attachment(name: str) -> None:
    """Compensating delete for a blob whose tweet was never committed."""

    try:
        _storage().delete(name)
    except OSError:
        logger.exception("could not discard orphaned attachment %s", name)
