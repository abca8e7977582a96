"""
API error taxonomy.

Services raise these; `main.py` renders them as the error envelope
`{"success": false, "error": ..., "message": ...}`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import status

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Erro interno do servidor"
    message: str = "Ocorreu um erro inesperado"

    def __init__(
        self,
        message: str | None = None,
        *,
        error: str | None = None,
        headers: dict[str, str] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or type(self).message
        self.error = error or type(self).error
        self.headers = headers
        self.extra = extra or {}
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Dados inválidos"
    message = "Os dados enviados não são válidos"


class AuthenticationError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "API Key necessária"
    message = "Forneça uma API Key válida no header x-api-key ou authorization"


class AuthorizationError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "API Key inválida"
    message = "API Key fornecida não é válida"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Não encontrado"
    message = "Recurso não encontrado"


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflito"
    message = "O recurso já existe"


class RateLimitError(ApiError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    error = "Muitas requisições"
    message = "Limite de requisições excedido"


class InternalError(ApiError):
    pass


@contextmanager
def storage_guard(message: str, *, event: str, **context: Any) -> Iterator[None]:
    """
    Turn any storage failure inside the block into an `InternalError`.

    The driver error is logged with its traceback; the client only sees
    `message`.
    """
    try:
        yield
    except ApiError:
        raise
    except Exception as exc:
        details = " ".join(f"{key}={value}" for key, value in context.items())
        logger.exception("%s %s", event, details)
        raise InternalError(message) from exc
