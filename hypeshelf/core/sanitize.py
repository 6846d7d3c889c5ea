"""Validation and sanitization of untrusted field values.

Text sanitization here is plain-text defense in depth: it strips markup and
script-like fragments before anything is stored. It does not parse HTML and
its output must not be rendered as raw HTML.
"""

import logging
import re
from typing import Any, Iterable

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from hypeshelf.constants import URL_MAX_LENGTH
from .errors import ValidationError

logger = logging.getLogger(__name__)

_http_url_adapter = TypeAdapter(HttpUrl)

# Applied in order, repeatedly, until the text stops changing.
_STRIP_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"[<>]"),
    re.compile(r"</?script[^>]*>", re.IGNORECASE),
    re.compile(r"(?:javascript|data|vbscript|file):", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
    re.compile(r"style\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE),
    re.compile(r"[\x00-\x1f\x7f]"),
    re.compile(
        r";\s*(?:DROP|DELETE|INSERT|UPDATE|ALTER|CREATE|EXEC|EXECUTE)\s+",
        re.IGNORECASE,
    ),
    re.compile(r"--"),
    re.compile(r"/\*"),
    re.compile(r"\*/"),
]
_WHITESPACE_RUN = re.compile(r"\s+")


def _strip_dangerous(text: str) -> str:
    """Remove markup and script-like fragments until none remain.

    A single pass is not enough: removing one fragment can join its
    neighbours into a new one (e.g. "javajavascript:script:").
    """
    previous = None
    while text != previous:
        previous = text
        # Collapse first so tabs and newlines become spaces, not nothing.
        text = _WHITESPACE_RUN.sub(" ", text)
        for pattern in _STRIP_PATTERNS:
            text = pattern.sub("", text)
    return _WHITESPACE_RUN.sub(" ", text).strip()


def sanitize_text(value: Any, min_length: int, max_length: int, field_name: str) -> str:
    """Validate the length of a text field and strip dangerous content.

    Args:
        value: The untrusted input.
        min_length: Minimum length of the trimmed value.
        max_length: Maximum length of the trimmed value.
        field_name: Human-readable field label used in error messages.

    Returns:
        The sanitized text.

    Raises:
        ValidationError: If the value is not a string or its trimmed length is
            out of bounds, or if nothing meaningful is left after sanitizing.
    """
    if value is None:
        raise ValidationError(f"{field_name} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")

    trimmed = value.strip()
    if len(trimmed) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters")
    if len(trimmed) > max_length:
        raise ValidationError(
            f"{field_name} must be less than {max_length} characters"
        )

    sanitized = _strip_dangerous(trimmed)
    if len(sanitized) < min_length:
        logger.warning(f"{field_name} was reduced below minimum length by sanitizing")
        raise ValidationError(f"{field_name} must be at least {min_length} characters")
    return sanitized


def validate_url(value: Any) -> str:
    """Check that a link is an absolute http(s) URL of sane length.

    Returns the trimmed input exactly as given; the parsed form is only used
    for checking.
    """
    if value is None:
        raise ValidationError("Link is required")
    if not isinstance(value, str):
        raise ValidationError("Link must be a string")

    trimmed = value.strip()
    if not trimmed:
        raise ValidationError("Link is required")
    if len(trimmed) > URL_MAX_LENGTH:
        raise ValidationError(
            f"URL is too long (maximum {URL_MAX_LENGTH} characters)"
        )

    try:
        _http_url_adapter.validate_python(trimmed)
    except PydanticValidationError:
        raise ValidationError(
            "Please enter a valid URL using the http:// or https:// protocol"
        )
    return trimmed


def validate_genre(value: Any, allowed: Iterable[str]) -> str:
    """Check that a genre is exactly one of the allowed values (case-sensitive)."""
    if value is None:
        raise ValidationError("Genre is required")
    if not isinstance(value, str):
        raise ValidationError("Genre must be a string")

    trimmed = value.strip()
    if not trimmed:
        raise ValidationError("Genre is required")

    allowed = tuple(allowed)
    if trimmed not in allowed:
        raise ValidationError(f"Genre must be one of: {', '.join(allowed)}")
    return trimmed


def validate_image_id(value: Any) -> str:
    """Check that an image reference is a non-blank string."""
    if not isinstance(value, str):
        raise ValidationError("Image ID must be a string")

    trimmed = value.strip()
    if not trimmed:
        raise ValidationError("Image ID cannot be empty")
    return trimmed
