"""
API-key gate for the protected `/api/v1` routes.

A single shared secret (`API_KEY`) is compared verbatim against the value of
the `x-api-key` header, or the `authorization` header when the first is
absent. No Bearer prefix, no hashing.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header, Request
from fastapi.security import APIKeyHeader

from core import errors
from core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Registered as the OpenAPI security scheme so Swagger UI shows an "Authorize" box.
api_key_header = APIKeyHeader(
    name="x-api-key",
    scheme_name="ApiKeyAuth",
    description="API Key necessária para autenticação",
    auto_error=False,
)


def extract_api_key(x_api_key: str | None, authorization: str | None) -> str | None:
    return x_api_key or authorization or None


def verify_api_key(credential: str | None, secret: str | None) -> None:
    if not credential:
        raise errors.AuthenticationError()
    # An unset secret matches nothing.
    if secret is None or credential != secret:
        raise errors.AuthorizationError()


async def require_api_key(
    request: Request,
    x_api_key: str | None = Depends(api_key_header),
    authorization: str | None = Header(default=None, include_in_schema=False),
    settings: Settings = Depends(get_settings),
) -> None:
    credential = extract_api_key(x_api_key, authorization)
    try:
        verify_api_key(credential, settings.api_key)
    except errors.ApiError as exc:
        logger.info("auth_rejected status=%s path=%s", exc.status_code, request.url.path)
        raise
