"""Translation of gateway errors into HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from hypeshelf.core.errors import ErrorKind, GatewayError

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.AUTHORIZATION: status.HTTP_403_FORBIDDEN,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.SELF_DEMOTION: status.HTTP_409_CONFLICT,
}


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render a GatewayError as `{"kind": ..., "detail": ...}`."""
    status_code = STATUS_BY_KIND[exc.kind]
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if exc.kind is ErrorKind.AUTHENTICATION
        else None
    )
    logger.debug(f"{request.method} {request.url.path} failed: {exc!r}")
    return JSONResponse(
        status_code=status_code,
        content={"kind": exc.kind.value, "detail": exc.message},
        headers=headers,
    )
