"""Resolution of callers to internal user records and their roles."""

import logging
from typing import Optional

from hypeshelf.constants import DISPLAY_NAME_MAX_LENGTH
from hypeshelf.models.caller import CallerContext
from hypeshelf.models.user import DEFAULT_ROLE, ResolvedRole
from .errors import AuthenticationError
from .sanitize import sanitize_text
from .stores import UserStore

logger = logging.getLogger(__name__)


def clean_display_name(name: Optional[str], field_name: str) -> Optional[str]:
    """Sanitize a display name taken from the identity provider.

    The name is not the caller's input, so a name with nothing left after
    sanitizing is dropped rather than rejected.

    Returns:
        The sanitized name, or None if there is no usable name.

    Raises:
        ValidationError: If the name is too long.
    """
    if not name:
        return None
    cleaned = sanitize_text(name, 0, DISPLAY_NAME_MAX_LENGTH, field_name)
    if not cleaned:
        logger.info(f"Dropping display name {name!r} with no usable text")
        return None
    return cleaned


def resolve_role(caller: CallerContext, users: UserStore) -> Optional[ResolvedRole]:
    """Look up the caller's role without writing anything.

    Safe to use from read-only operations. Legacy records without a role are
    reported as plain users.

    Returns:
        The caller's role and user id, or None if the caller is anonymous or
        has no user record yet.
    """
    if caller.identity is None:
        return None

    user = users.get_user_by_external_id(caller.identity.subject)
    if user is None:
        return None
    return ResolvedRole(role=user.effective_role, user_id=user.id)


def resolve_or_create_role(caller: CallerContext, users: UserStore) -> ResolvedRole:
    """Get the caller's role, creating or repairing their user record if needed.

    New users are always created with the default 'user' role; admin can only
    be granted by an existing admin through a role change. Legacy records
    missing a role are patched to the default role.

    Raises:
        AuthenticationError: If the caller is anonymous.
        ValidationError: If the identity's display name cannot be sanitized.
    """
    if caller.identity is None:
        raise AuthenticationError()

    subject = caller.identity.subject
    user = users.get_user_by_external_id(subject)

    if user is None:
        display_name = clean_display_name(caller.identity.name, "User name")
        user = users.create_user(subject, DEFAULT_ROLE, display_name)
        logger.info(f"Created user id={user.id} for external_id={subject}")
        return ResolvedRole(role=DEFAULT_ROLE, user_id=user.id)

    if user.role is None:
        logger.info(f"Assigning default role to legacy user id={user.id}")
        users.set_user_role(user.id, DEFAULT_ROLE)
        return ResolvedRole(role=DEFAULT_ROLE, user_id=user.id)

    return ResolvedRole(role=user.role, user_id=user.id)
