"""Admin-only user management: role changes and user-table maintenance."""

import logging
from contextlib import nullcontext
from typing import Optional
from uuid import UUID

from hypeshelf.models.caller import CallerContext
from hypeshelf.models.user import DEFAULT_ROLE, ResolvedRole, Role, RoleChange, UserSummary
from .errors import AuthenticationError, AuthorizationError, NotFoundError, SelfDemotionError
from .identity import resolve_or_create_role, resolve_role
from .policy import can_administer
from .recommendations import Transaction
from .stores import UserStore

logger = logging.getLogger(__name__)


class RoleAdministrationGateway:
    def __init__(self, users: UserStore, transaction: Transaction = nullcontext):
        self.users = users
        self.transaction = transaction

    def get_my_role(self, caller: CallerContext) -> Optional[ResolvedRole]:
        """Get the caller's role without creating a user record."""
        with self.transaction():
            return resolve_role(caller, self.users)

    def list_users(self, caller: CallerContext) -> list[UserSummary]:
        """List every user, with legacy records reported as plain users."""
        if caller.identity is None:
            raise AuthenticationError()

        with self.transaction():
            resolved = resolve_role(caller, self.users)
            if resolved is None or not can_administer(resolved.role):
                raise AuthorizationError("Only admins can view all users")
            users = self.users.get_all_users()
        return [UserSummary.from_user(user) for user in users]

    def change_role(
        self, caller: CallerContext, user_id: UUID, new_role: Role
    ) -> RoleChange:
        """Promote or demote a user.

        Raises:
            SelfDemotionError: If an admin tries to demote their own record.
        """
        if caller.identity is None:
            raise AuthenticationError()

        with self.transaction():
            self._require_admin(caller, "Only admins can update user roles")

            target = self.users.get_user_by_id(user_id)
            if target is None:
                raise NotFoundError("User not found")
            if target.external_id == caller.identity.subject and new_role != "admin":
                raise SelfDemotionError()

            self.users.set_user_role(user_id, new_role)
        logger.info(
            f"Role of user {user_id} set to {new_role} by {caller.identity.subject}"
        )
        return RoleChange(user_id=user_id, role=new_role)

    def cleanup_orphan_users(self, caller: CallerContext) -> int:
        """Delete every user record that has no external identity.

        This cannot be undone.

        Returns:
            The number of records deleted.
        """
        with self.transaction():
            self._require_admin(caller, "Only admins can run cleanup")
            deleted = self.users.delete_users_without_external_id()
        logger.info(f"Deleted {deleted} users without an external id")
        return deleted

    def migrate_legacy_users(self, caller: CallerContext) -> int:
        """Give every user record that lacks a role the default role.

        Returns:
            The number of records updated.
        """
        with self.transaction():
            self._require_admin(caller, "Only admins can run migration")
            updated = self.users.assign_role_to_users_without_role(DEFAULT_ROLE)
        logger.info(f"Assigned default role to {updated} legacy users")
        return updated

    def _require_admin(self, caller: CallerContext, message: str) -> ResolvedRole:
        resolved = resolve_or_create_role(caller, self.users)
        if not can_administer(resolved.role):
            logger.warning(f"Denied admin operation to user {resolved.user_id}")
            raise AuthorizationError(message)
        return resolved
