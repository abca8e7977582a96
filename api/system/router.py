"""
Smoke-test endpoint for API key holders.
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from core import responses
from core.config import Settings, get_settings

router = APIRouter()


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/test", summary="Endpoint de teste")
def api_test(settings: Settings = Depends(get_settings)) -> dict:
    return responses.success(
        "API Test endpoint funcionando!",
        {
            "status": "success",
            "timestamp": utc_timestamp(),
            "version": settings.version,
        },
        links={
            "self": responses.link(settings.base_url, "/api/v1/test"),
            "api_root": responses.link(settings.base_url, "/"),
        },
    )
