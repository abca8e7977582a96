from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth.dependencies import require_api_key
from clientes.router import router as clientes_router
from core import errors, responses
from core.config import Settings
from core.db import Database
from core.logging_config import setup_logging
from core.rate_limit import ApiRateLimit, enforce_rate_limit
from pesquisas.router import router as pesquisas_router
from system.router import router as system_router, utc_timestamp

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization", "x-api-key"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open one pool per data store for the whole process lifetime.
    settings: Settings = app.state.settings
    databases: list[Database] = [app.state.pesquisas_db, app.state.clientes_db]
    for database in databases:
        await database.connect()

    logger.info("api_started base_url=%s", settings.base_url)
    logger.info("api_version version=%s environment=%s", settings.version, settings.environment)
    logger.info("api_docs url=%s/api/v1/docs", settings.base_url)
    logger.info("rate_limit max=%s window_minutes=%s", settings.rate_limit_max, settings.rate_limit_window_minutes)
    try:
        yield
    finally:
        for database in databases:
            await database.close()


def root(request: Request) -> dict:
    settings: Settings = request.app.state.settings
    return {
        "message": "API de Pesquisas e Cadastro de Clientes funcionando!",
        "status": "online",
        "timestamp": utc_timestamp(),
        "version": settings.version,
        "endpoints": {
            "testApi": "GET /api/v1/test (requer API Key)",
            "pesquisas": "GET /api/v1/pesquisas (requer API Key)",
            "consultar": "GET /api/v1/clientes/:cpf (requer API Key)",
            "cadastrar": "POST /api/v1/clientes (requer API Key)",
            "atualizar": "PUT /api/v1/clientes/:cpf (requer API Key)",
            "deletar": "DELETE /api/v1/clientes/:cpf (requer API Key)",
        },
        "links": {
            "self": responses.link(settings.base_url, "/"),
            "docs": responses.link(settings.base_url, "/api/v1/docs"),
        },
    }


def _is_preflight(request: Request) -> bool:
    return "origin" in request.headers and "access-control-request-method" in request.headers


async def answer_options(request: Request, call_next):
    # Every OPTIONS request ends in a 200. Preflights pass through CORSMiddleware
    # first so allowed origins still get their Access-Control-* headers.
    if request.method != "OPTIONS":
        return await call_next(request)
    if _is_preflight(request):
        response = await call_next(request)
        if response.status_code < 400:
            return response
    return Response(status_code=200)


def _error_response(exc: errors.ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=responses.failure(exc.error, exc.message, **exc.extra),
        headers=exc.headers,
    )


async def api_error_handler(_: Request, exc: errors.ApiError) -> JSONResponse:
    return _error_response(exc)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        error, message = "Não encontrado", f"Rota {request.url.path} não encontrada"
    elif exc.status_code == 405:
        error, message = "Método não permitido", f"Método {request.method} não suportado nesta rota"
    else:
        error, message = "Erro na requisição", str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=responses.failure(error, message),
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for item in exc.errors():
        location = ".".join(str(part) for part in item.get("loc", ())[1:])
        problems.append(f"{location}: {item.get('msg')}" if location else str(item.get("msg")))
    message = "; ".join(problems) or errors.ValidationError.message
    return _error_response(errors.ValidationError(message))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return _error_response(errors.InternalError())


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.title,
        version=settings.version,
        description=settings.description,
        lifespan=lifespan,
        docs_url="/api/v1/docs",
        openapi_url="/api/v1/openapi.json",
        redoc_url=None,
        servers=[
            {
                "url": settings.base_url,
                "description": "Servidor de produção" if settings.is_production else "Servidor de desenvolvimento",
            }
        ],
        swagger_ui_parameters={"persistAuthorization": True},
    )

    app.state.settings = settings
    app.state.pesquisas_db = Database("pesquisas", settings.pesquisas_database_url, ssl=settings.database_ssl)
    app.state.clientes_db = Database("clientes", settings.clientes_database_url, ssl=settings.database_ssl)
    app.state.rate_limit = ApiRateLimit(settings)

    app.add_exception_handler(errors.ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Last added runs first: the OPTIONS catch-all wraps CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    app.middleware("http")(answer_options)

    app.add_api_route("/", root, methods=["GET"], summary="Informações da API", tags=["Sistema"])

    v1 = APIRouter(prefix="/api/v1", dependencies=[Depends(enforce_rate_limit), Depends(require_api_key)])
    v1.include_router(system_router, tags=["Sistema"])
    v1.include_router(pesquisas_router, tags=["Pesquisas"])
    v1.include_router(clientes_router, tags=["Clientes"])
    app.include_router(v1)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
