"""User model for application-level user management."""

from __future__ import annotations
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel


Role = Literal["admin", "user"]

DEFAULT_ROLE: Role = "user"


class User(BaseModel):
    """Application user with role-based access control.

    Users are created lazily on their first mutation. The external_id links to
    the 'sub' claim from the identity provider's JWT. Legacy records may lack
    both an external_id and a role.
    """

    id: UUID
    external_id: Optional[str] = None
    role: Optional[Role] = None
    display_name: Optional[str] = None
    created_at: datetime

    @property
    def effective_role(self) -> Role:
        """The role to act on, with legacy records treated as plain users."""
        return self.role or DEFAULT_ROLE

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_legacy(self) -> bool:
        """Check if the record predates role tracking."""
        return self.role is None


class UserSummary(BaseModel):
    """A user as shown to administrators; role is always populated."""

    id: UUID
    external_id: Optional[str] = None
    display_name: Optional[str] = None
    role: Role
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> UserSummary:
        return cls(
            id=user.id,
            external_id=user.external_id,
            display_name=user.display_name,
            role=user.effective_role,
            created_at=user.created_at,
        )


class ResolvedRole(BaseModel):
    """A caller's role together with their internal user record id."""

    role: Role
    user_id: UUID


class RoleChange(BaseModel):
    """Confirmation returned after a role change."""

    success: bool = True
    user_id: UUID
    role: Role
