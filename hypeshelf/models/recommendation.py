"""Recommendation models and the projections handed to clients."""

from __future__ import annotations
from datetime import datetime
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel

from .user import Role


Genre = Literal[
    "Action",
    "Adventure",
    "Comedy",
    "Drama",
    "Horror",
    "Romance",
    "Documentary",
    "Sports",
    "Biopic",
]


class RecommendationFields(BaseModel):
    """Untrusted content fields submitted on create and update.

    Values are typed loosely on purpose: everything is validated and sanitized
    by the gateway before it reaches storage, including missing ones.
    """

    title: Optional[Any] = None
    genre: Optional[Any] = None
    link: Optional[Any] = None
    blurb: Optional[Any] = None
    image_id: Optional[Any] = None


class RecommendationContent(BaseModel):
    """Sanitized, mutable content of a recommendation."""

    title: str
    genre: Genre
    link: str
    blurb: str
    image_id: Optional[str] = None


class Recommendation(BaseModel):
    """A stored recommendation.

    `author_id` is the creator's external identity and never changes.
    `is_staff_pick` is only changed by the feature toggle.
    """

    id: UUID
    title: str
    genre: Genre
    link: str
    blurb: str
    author_id: str
    author_name: str
    is_staff_pick: bool = False
    image_id: Optional[str] = None
    created_at: datetime


class PublicRecommendation(BaseModel):
    """A recommendation without its author's identity."""

    id: UUID
    title: str
    genre: Genre
    link: str
    blurb: str
    author_name: str
    is_staff_pick: bool
    image_id: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_recommendation(cls, rec: Recommendation) -> PublicRecommendation:
        return cls(**rec.model_dump(exclude={"author_id"}))


class RecommendationListing(BaseModel):
    """Full listing for signed-in callers, with what the UI needs for ownership checks."""

    recommendations: list[Recommendation]
    current_user_id: str
    user_id: Optional[UUID] = None
    user_role: Role
