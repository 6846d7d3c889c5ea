# This file loads env variables and must thus be imported before anything else.
from . import env_loader  # noqa: F401
from .env_loader import get_current_environment, get_cors_origins

import os
import logging

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from hypeshelf.core.errors import GatewayError
from .errors import gateway_error_handler
from .models import EnvironmentResponse
from .routers import recommendation_router, user_router, image_router

"""FastAPI application setup for the HypeShelf API.

Exposes routes for listing and managing recommendations, administering user
roles, and handing out image upload URLs. This module configures CORS,
error translation, and logging behavior.
"""

logger = logging.getLogger(__name__)

app = FastAPI(title="HypeShelf")
app.include_router(recommendation_router)
app.include_router(user_router)
app.include_router(image_router)
app.add_exception_handler(GatewayError, gateway_error_handler)
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Configure basic logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(filename)s:%(lineno)d",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# Configure the logging for the API itself if the user specifies it.
if "LOG_LEVEL" in os.environ:
    match os.environ["LOG_LEVEL"].upper():
        case "DEBUG":
            log_level = logging.DEBUG
        case "INFO":
            log_level = logging.INFO
        case "WARNING":
            log_level = logging.WARNING
        case "ERROR":
            log_level = logging.ERROR
        case "CRITICAL":
            log_level = logging.CRITICAL
        case _:
            raise ValueError(f"Invalid log level: {os.environ['LOG_LEVEL']}")
    logging.getLogger("hypeshelf").setLevel(log_level)


@app.get("/health")
@app.options("/health")
def health_check(response: Response) -> dict[str, str]:
    """Health check endpoint that returns 200 status with CORS from anywhere."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "*"
    return {"status": "healthy"}


@app.get("/environment", response_model=EnvironmentResponse)
def get_environment() -> EnvironmentResponse:
    """Get the current environment configuration."""
    environment = get_current_environment()
    return EnvironmentResponse(environment=environment)
