from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from hypeshelf.models.user import Role
from .env_loader import EnvironmentName


class CreatedResponse(BaseModel):
    """Response model for endpoints that return the affected record's id."""

    id: UUID


class StaffPickRequest(BaseModel):
    is_staff_pick: bool


class ChangeRoleRequest(BaseModel):
    role: Role


class MaintenanceResponse(BaseModel):
    """How many user records a maintenance operation touched."""

    count: int


class UploadUrlResponse(BaseModel):
    upload_url: str


class ImageUrlResponse(BaseModel):
    url: Optional[str] = None


class EnvironmentResponse(BaseModel):
    """Response model for the environment endpoint."""

    environment: EnvironmentName
