"""JWT validation for identity provider access tokens."""

import os
import time
import logging
from typing import Optional, Dict, Any

import jwt
from jwt import PyJWKClient
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from hypeshelf.models.caller import CallerContext

logger = logging.getLogger(__name__)
oauth_scheme = HTTPBearer(auto_error=False)

# JWKS client cache
_jwks_client: Optional[PyJWKClient] = None
_jwks_cache_time: float = 0
JWKS_CACHE_DURATION = 3600  # 1 hour


def get_identity_provider_url() -> str:
    """Get identity provider base URL (the token issuer) from environment."""
    url = os.getenv("IDENTITY_PROVIDER_URL", "http://localhost:8080")
    return url.rstrip("/")


def get_jwt_audience() -> str:
    """Get expected JWT audience from environment.

    This is a required environment variable validated at startup.
    """
    return os.environ["JWT_AUDIENCE"]


def get_jwt_algorithms() -> list[str]:
    """Get the signing algorithms accepted for access tokens."""
    raw = os.getenv("JWT_ALGORITHMS", "RS256,ES256")
    return [alg.strip() for alg in raw.split(",") if alg.strip()]


def get_jwks_client() -> PyJWKClient:
    """Get or refresh JWKS client for JWT validation."""
    global _jwks_client, _jwks_cache_time

    current_time = time.time()
    if _jwks_client is None or (current_time - _jwks_cache_time) > JWKS_CACHE_DURATION:
        identity_url = get_identity_provider_url()
        jwks_url = f"{identity_url}/.well-known/jwks.json"
        _jwks_client = PyJWKClient(
            jwks_url, cache_keys=True, lifespan=JWKS_CACHE_DURATION
        )
        _jwks_cache_time = current_time
        logger.info(f"Refreshed JWKS client from {jwks_url}")

    return _jwks_client


def validate_jwt_token(token: str) -> Optional[Dict[str, Any]]:
    """Validate JWT access token locally using JWKS.

    Returns decoded claims if valid, None if invalid.
    """
    try:
        jwks_client = get_jwks_client()
        signing_key = jwks_client.get_signing_key_from_jwt(token)

        identity_url = get_identity_provider_url()
        audience = get_jwt_audience()

        decoded = jwt.decode(
            token,
            signing_key.key,
            algorithms=get_jwt_algorithms(),
            issuer=identity_url,
            audience=audience,
            options={"require": ["exp", "iss", "sub", "aud"]},
        )
        return decoded
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {e}")
        return None
    except Exception as e:
        logger.error(f"JWT validation error: {e}")
        return None


def caller_from_claims(claims: Dict[str, Any]) -> CallerContext:
    """Build a caller context from verified token claims.

    The display name comes from the 'name' claim, falling back to 'username'.
    """
    sub = claims.get("sub")
    if not sub or not isinstance(sub, str):
        logger.error(f"JWT missing sub claim: {claims}")
        return CallerContext.anonymous()

    name = claims.get("name") or claims.get("username")
    if not isinstance(name, str):
        name = None
    return CallerContext.for_subject(sub, name)


async def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth_scheme),
) -> CallerContext:
    """FastAPI dependency producing the caller context for a request.

    Never rejects a request by itself: a missing or invalid token yields an
    anonymous caller, and each operation decides whether that is allowed.
    """
    if not credentials:
        return CallerContext.anonymous()

    claims = validate_jwt_token(credentials.credentials)
    if not claims:
        return CallerContext.anonymous()

    return caller_from_claims(claims)
