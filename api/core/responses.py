"""
Response envelope and HATEOAS link helpers.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode


def success(
    message: str,
    data: Any,
    *,
    links: dict[str, str | None],
    meta: dict[str, Any] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True, "message": message, "data": data}
    if meta is not None:
        body["meta"] = meta
    body["links"] = links
    return body


def failure(error: str, message: str, **extra: Any) -> dict[str, Any]:
    return {"success": False, "error": error, "message": message, **extra}


def link(base_url: str, path: str, **query: Any) -> str:
    """
    Build an absolute link under `base_url`. Query params keep their order.
    """
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    if query:
        url = f"{url}?{urlencode(query)}"
    return url
