"""Bearer token authentication for the API.

The dashboard and the Discord bot share one token, API_AUTH_TOKEN.
"""

import logging
import os
import secrets

from fastapi import HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

logger = logging.getLogger(__name__)

# auto_error off so a missing header is a 401 like a wrong token
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorised(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_api_token() -> str:
    """Read the shared token.

    :raises ValueError: If API_AUTH_TOKEN is unset or empty.
    """
    token = os.environ.get("API_AUTH_TOKEN")
    if not token:
        raise ValueError("API_AUTH_TOKEN is not set")
    return token


def verify_token(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> str:
    """Reject requests whose bearer token does not match API_AUTH_TOKEN.

    :param credentials: Parsed Authorization header, None when absent.
    :returns: The accepted token.
    :raises HTTPException: 401 for a missing or wrong token, 500 if the
        server has no token configured.
    """
    try:
        expected = get_api_token()
    except ValueError as e:
        logger.error(f"Rejecting request, auth is not configured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="API authentication not configured",
        ) from e

    if credentials is None:
        raise _unauthorised("Missing bearer token")

    if not secrets.compare_digest(credentials.credentials.encode(), expected.encode()):
        logger.warning("Rejected request with an invalid API token")
        raise _unauthorised("Invalid authentication token")

    return credentials.credentials
