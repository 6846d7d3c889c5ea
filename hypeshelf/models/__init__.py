from .caller import CallerContext, Identity
from .recommendation import (
    Genre,
    Recommendation,
    RecommendationContent,
    RecommendationFields,
    RecommendationListing,
    PublicRecommendation,
)
from .user import User, UserSummary, Role, ResolvedRole, RoleChange, DEFAULT_ROLE


__all__ = [
    "CallerContext",
    "Identity",
    "Genre",
    "Recommendation",
    "RecommendationContent",
    "RecommendationFields",
    "RecommendationListing",
    "PublicRecommendation",
    "User",
    "UserSummary",
    "Role",
    "ResolvedRole",
    "RoleChange",
    "DEFAULT_ROLE",
]
