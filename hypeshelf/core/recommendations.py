"""Operations on recommendations, guarded by identity, validation and policy checks."""

import logging
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Optional
from uuid import UUID

from hypeshelf.constants import (
    ALL_GENRES_FILTER,
    ALLOWED_GENRES,
    ANONYMOUS_AUTHOR_NAME,
    BLURB_MAX_LENGTH,
    BLURB_MIN_LENGTH,
    DEFAULT_PUBLIC_COUNT,
    MAX_PUBLIC_COUNT,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)
from hypeshelf.models.caller import CallerContext
from hypeshelf.models.recommendation import (
    PublicRecommendation,
    Recommendation,
    RecommendationContent,
    RecommendationFields,
    RecommendationListing,
)
from hypeshelf.models.user import DEFAULT_ROLE
from .errors import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .identity import clean_display_name, resolve_or_create_role, resolve_role
from .policy import can_feature, can_modify
from .sanitize import sanitize_text, validate_genre, validate_image_id, validate_url
from .stores import RecommendationStore, UserStore

logger = logging.getLogger(__name__)

Transaction = Callable[[], ContextManager[Any]]


def clean_fields(fields: RecommendationFields) -> RecommendationContent:
    """Validate and sanitize every content field of a recommendation.

    Used identically by create and update; nothing previously stored is trusted.
    """
    return RecommendationContent(
        title=sanitize_text(fields.title, TITLE_MIN_LENGTH, TITLE_MAX_LENGTH, "Title"),
        genre=validate_genre(fields.genre, ALLOWED_GENRES),
        link=validate_url(fields.link),
        blurb=sanitize_text(fields.blurb, BLURB_MIN_LENGTH, BLURB_MAX_LENGTH, "Blurb"),
        image_id=(
            validate_image_id(fields.image_id) if fields.image_id is not None else None
        ),
    )


def clamp_count(count: Optional[int]) -> int:
    if count is None:
        count = DEFAULT_PUBLIC_COUNT
    return min(max(1, count), MAX_PUBLIC_COUNT)


class RecommendationGateway:
    """Recommendation operations in front of the record store.

    Each operation runs inside a single store transaction.
    """

    def __init__(
        self,
        users: UserStore,
        recommendations: RecommendationStore,
        transaction: Transaction = nullcontext,
    ):
        self.users = users
        self.recommendations = recommendations
        self.transaction = transaction

    def list_public(self, count: Optional[int] = DEFAULT_PUBLIC_COUNT) -> list[PublicRecommendation]:
        """Get the most recent recommendations, without author identities."""
        with self.transaction():
            recs = self.recommendations.get_recent_recommendations(clamp_count(count))
        return [PublicRecommendation.from_recommendation(rec) for rec in recs]

    def list_all(
        self, caller: CallerContext, genre: Optional[str] = None
    ) -> RecommendationListing:
        """Get all recommendations for a signed-in caller, optionally by genre.

        An invalid genre filter produces an empty listing rather than an error.
        """
        if caller.identity is None:
            raise AuthenticationError()

        with self.transaction():
            resolved = resolve_role(caller, self.users)
            listing = RecommendationListing(
                recommendations=[],
                current_user_id=caller.identity.subject,
                user_id=resolved.user_id if resolved else None,
                user_role=resolved.role if resolved else DEFAULT_ROLE,
            )

            if genre and genre.strip() and genre != ALL_GENRES_FILTER:
                try:
                    genre = validate_genre(genre, ALLOWED_GENRES)
                except ValidationError:
                    logger.debug(f"Ignoring invalid genre filter {genre!r}")
                    return listing
                listing.recommendations = self.recommendations.get_all_recommendations(
                    genre=genre
                )
            else:
                listing.recommendations = self.recommendations.get_all_recommendations()
        return listing

    def get_genres(self) -> list[str]:
        """Get the sorted genres that have at least one recommendation."""
        with self.transaction():
            return sorted(self.recommendations.get_distinct_genres())

    def create(self, caller: CallerContext, fields: RecommendationFields) -> UUID:
        """Create a recommendation authored by the caller.

        Returns:
            The new recommendation's id.
        """
        if caller.identity is None:
            raise AuthenticationError()

        with self.transaction():
            resolve_or_create_role(caller, self.users)
            content = clean_fields(fields)
            author_name = (
                clean_display_name(caller.identity.name, "Author name")
                or ANONYMOUS_AUTHOR_NAME
            )
            rec = self.recommendations.create_recommendation(
                content, author_id=caller.identity.subject, author_name=author_name
            )
        logger.info(f"Created recommendation id={rec.id} by {caller.identity.subject}")
        return rec.id

    def update(
        self, caller: CallerContext, rec_id: UUID, fields: RecommendationFields
    ) -> UUID:
        """Replace the content of a recommendation the caller may modify.

        The author and staff pick flag are left untouched.
        """
        if caller.identity is None:
            raise AuthenticationError()

        with self.transaction():
            rec = self._get_existing(rec_id)
            resolved = resolve_or_create_role(caller, self.users)
            if not can_modify(rec, caller.identity.subject, resolved.role):
                logger.warning(
                    f"Denied update of recommendation {rec_id} by {caller.identity.subject}"
                )
                raise AuthorizationError("Not authorized to update this recommendation")

            content = clean_fields(fields)
            self.recommendations.update_recommendation_content(rec_id, content)
        return rec_id

    def delete(self, caller: CallerContext, rec_id: UUID) -> None:
        """Permanently delete a recommendation the caller may modify."""
        if caller.identity is None:
            raise AuthenticationError()

        with self.transaction():
            rec = self._get_existing(rec_id)
            resolved = resolve_or_create_role(caller, self.users)
            if not can_modify(rec, caller.identity.subject, resolved.role):
                logger.warning(
                    f"Denied deletion of recommendation {rec_id} by {caller.identity.subject}"
                )
                raise AuthorizationError("Not authorized to delete this recommendation")

            self.recommendations.delete_recommendation(rec_id)
        logger.info(f"Deleted recommendation id={rec_id} by {caller.identity.subject}")

    def toggle_staff_pick(
        self, caller: CallerContext, rec_id: UUID, is_staff_pick: bool
    ) -> None:
        """Mark or unmark a recommendation as a staff pick (admins only)."""
        with self.transaction():
            resolved = resolve_or_create_role(caller, self.users)
            if not can_feature(resolved.role):
                raise AuthorizationError(
                    "Only admins can mark recommendations as Staff Pick"
                )
            self._get_existing(rec_id)
            self.recommendations.set_staff_pick(rec_id, is_staff_pick)

    def _get_existing(self, rec_id: UUID) -> Recommendation:
        rec = self.recommendations.get_recommendation_by_id(rec_id)
        if rec is None:
            raise NotFoundError("Recommendation not found")
        return rec
