"""Image upload and lookup routes."""

from fastapi import APIRouter, Depends

from hypeshelf.app.dependencies import image_gateway
from hypeshelf.app.models import ImageUrlResponse, UploadUrlResponse
from hypeshelf.app.oauth import get_caller
from hypeshelf.core.images import ImageGateway
from hypeshelf.models.caller import CallerContext

router = APIRouter(prefix="/images", tags=["images"])


@router.post("/upload-url", response_model=UploadUrlResponse)
def create_upload_url(
    caller: CallerContext = Depends(get_caller),
    gateway: ImageGateway = Depends(image_gateway),
) -> UploadUrlResponse:
    """Get a single-use URL to upload an image to.

    The returned URL should be used right away; it expires.
    """
    return UploadUrlResponse(upload_url=gateway.generate_upload_url(caller))


@router.get("/{image_id}/url", response_model=ImageUrlResponse)
def read_image_url(
    image_id: str,
    gateway: ImageGateway = Depends(image_gateway),
) -> ImageUrlResponse:
    return ImageUrlResponse(url=gateway.get_image_url(image_id))
