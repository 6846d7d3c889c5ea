import os
import logging

from fastapi import HTTPException

from hypeshelf.core.images import ImageGateway
from hypeshelf.core.recommendations import RecommendationGateway
from hypeshelf.core.roles import RoleAdministrationGateway
from hypeshelf.db import recommendations as recommendation_db
from hypeshelf.db import users as user_db
from hypeshelf.db.connection import transaction
from hypeshelf.integrations.blob import BlobStoreClient

logger = logging.getLogger(__name__)


def recommendation_gateway() -> RecommendationGateway:
    return RecommendationGateway(
        users=user_db, recommendations=recommendation_db, transaction=transaction
    )


def role_admin_gateway() -> RoleAdministrationGateway:
    return RoleAdministrationGateway(users=user_db, transaction=transaction)


def image_gateway() -> ImageGateway:
    base_url = os.getenv("BLOB_STORE_URL")
    if not base_url:
        raise HTTPException(status_code=503, detail="Image storage not configured")
    blobs = BlobStoreClient(base_url=base_url, api_key=os.getenv("BLOB_STORE_API_KEY"))
    return ImageGateway(users=user_db, blobs=blobs, transaction=transaction)
