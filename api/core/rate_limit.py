"""
Per-client request limiting with SlowAPI.

One `ApiRateLimit` is built per app from `Settings` and stored on
`app.state.rate_limit`. The `/api/v1` router runs `enforce_rate_limit` as its
first dependency, so every versioned route draws from the same per-client
budget and the unversioned root is never counted. The check runs inside the
route rather than in `SlowAPIMiddleware` because routes mounted through
`include_router` are not visible to the middleware's route lookup.
"""

from __future__ import annotations

import logging
import time

from fastapi import Request, Response
from limits import RateLimitItem, parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from . import errors
from .config import Settings

logger = logging.getLogger(__name__)

SCOPE = "api"


class ApiRateLimit:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.item: RateLimitItem = parse(settings.rate_limit)
        self.limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")

    def check(self, request: Request) -> dict[str, str]:
        """
        Count one hit for the calling client and return the rate headers.

        Raises `RateLimitError` (with `Retry-After`) once the window's budget
        is spent.
        """
        client = get_remote_address(request)
        backend = self.limiter.limiter
        allowed = backend.hit(self.item, SCOPE, client)
        reset_at, remaining = backend.get_window_stats(self.item, SCOPE, client)

        headers = {
            "X-RateLimit-Limit": str(self.item.amount),
            "X-RateLimit-Remaining": str(remaining),
            "X-RateLimit-Reset": str(int(reset_at)),
        }
        if allowed:
            return headers

        window = self.settings.rate_limit_window_minutes
        headers["Retry-After"] = str(max(1, int(reset_at - time.time())))
        logger.info("rate_limited client=%s path=%s", client, request.url.path)
        raise errors.RateLimitError(
            f"Limite de {self.settings.rate_limit_max} requisições excedido. Tente novamente em {window} minutos.",
            headers=headers,
            extra={"retryAfter": f"{window} minutes"},
        )


async def enforce_rate_limit(request: Request, response: Response) -> None:
    rate_limit: ApiRateLimit = request.app.state.rate_limit
    response.headers.update(rate_limit.check(request))
