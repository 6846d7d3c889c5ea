"""Validation limits and fixed vocabularies shared across the service."""

from typing import get_args

from hypeshelf.models.recommendation import Genre

# Genres are matched exactly, including case.
ALLOWED_GENRES: tuple[str, ...] = get_args(Genre)

TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 200
BLURB_MIN_LENGTH = 10
BLURB_MAX_LENGTH = 1000
DISPLAY_NAME_MAX_LENGTH = 100
URL_MAX_LENGTH = 2048

DEFAULT_PUBLIC_COUNT = 5
MAX_PUBLIC_COUNT = 100

ALL_GENRES_FILTER = "all"
ANONYMOUS_AUTHOR_NAME = "Anonymous"
