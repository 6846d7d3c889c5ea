"""User and role administration routes."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends

from hypeshelf.app.dependencies import role_admin_gateway
from hypeshelf.app.models import ChangeRoleRequest, MaintenanceResponse
from hypeshelf.app.oauth import get_caller
from hypeshelf.core.roles import RoleAdministrationGateway
from hypeshelf.models.caller import CallerContext
from hypeshelf.models.user import ResolvedRole, RoleChange, UserSummary

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/role", response_model=Optional[ResolvedRole])
def read_my_role(
    caller: CallerContext = Depends(get_caller),
    gateway: RoleAdministrationGateway = Depends(role_admin_gateway),
) -> Optional[ResolvedRole]:
    """Get the caller's role, or null if signed out or not yet registered."""
    return gateway.get_my_role(caller)


@router.get("", response_model=list[UserSummary])
def read_users(
    caller: CallerContext = Depends(get_caller),
    gateway: RoleAdministrationGateway = Depends(role_admin_gateway),
) -> list[UserSummary]:
    return gateway.list_users(caller)


@router.patch("/{user_id}/role", response_model=RoleChange)
def update_user_role(
    user_id: UUID,
    request: ChangeRoleRequest,
    caller: CallerContext = Depends(get_caller),
    gateway: RoleAdministrationGateway = Depends(role_admin_gateway),
) -> RoleChange:
    """Promote or demote a user. Admins cannot demote themselves."""
    return gateway.change_role(caller, user_id, request.role)


@router.post("/maintenance/cleanup-orphans", response_model=MaintenanceResponse)
def cleanup_orphan_users(
    caller: CallerContext = Depends(get_caller),
    gateway: RoleAdministrationGateway = Depends(role_admin_gateway),
) -> MaintenanceResponse:
    """Permanently delete users with no identity provider link."""
    return MaintenanceResponse(count=gateway.cleanup_orphan_users(caller))


@router.post("/maintenance/migrate-legacy", response_model=MaintenanceResponse)
def migrate_legacy_users(
    caller: CallerContext = Depends(get_caller),
    gateway: RoleAdministrationGateway = Depends(role_admin_gateway),
) -> MaintenanceResponse:
    """Give every user without a role the default 'user' role."""
    return MaintenanceResponse(count=gateway.migrate_legacy_users(caller))
