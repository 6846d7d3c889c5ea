"""Authorization predicates shared by every gateway operation."""

from hypeshelf.models.recommendation import Recommendation
from hypeshelf.models.user import Role


def can_modify(record: Recommendation, caller_external_id: str, caller_role: Role) -> bool:
    """Admins may modify anything; everyone else only what they authored."""
    return caller_role == "admin" or record.author_id == caller_external_id


def can_feature(caller_role: Role) -> bool:
    return caller_role == "admin"


def can_administer(caller_role: Role) -> bool:
    return caller_role == "admin"
