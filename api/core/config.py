"""
Environment-driven settings.

Values are read once into a frozen `Settings` instance when the app is built.
A local `.env` file is honoured through python-dotenv; real environment
variables always win over it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from fastapi import Request

DEFAULT_TITLE = "API de Pesquisas e Cadastro de Clientes"
DEFAULT_DESCRIPTION = "API REST para gerenciamento de pesquisas acadêmicas e cadastro de clientes"


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _split_csv(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    api_key: str | None = None
    port: int = 3000
    environment: str = "development"
    base_url: str = "http://localhost:3000"
    cors_origins: tuple[str, ...] = ("*",)
    rate_limit_max: int = 100
    rate_limit_window_minutes: int = 15
    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    version: str = "1.0.0"
    pesquisas_database_url: str = ""
    clientes_database_url: str = ""
    database_ssl: str = "require"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def rate_limit(self) -> str:
        """
        Rate limit in the `limits` string notation, e.g. "100/15 minutes".
        """
        return f"{self.rate_limit_max}/{self.rate_limit_window_minutes} minutes"

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        port = _env_int("PORT", 3000)
        shared_db = _env_str("DATABASE_URL")
        return cls(
            api_key=_env_str("API_KEY") or None,
            port=port,
            environment=_env_str("APP_ENV", "development"),
            base_url=_env_str("BASE_URL", f"http://localhost:{port}").rstrip("/"),
            cors_origins=_split_csv(_env_str("CORS_ORIGINS", "*")) or ("*",),
            rate_limit_max=max(1, _env_int("RATE_LIMIT_MAX", 100)),
            rate_limit_window_minutes=max(1, _env_int("RATE_LIMIT_WINDOW_MINUTES", 15)),
            title=_env_str("SWAGGER_TITLE", DEFAULT_TITLE),
            description=_env_str("SWAGGER_DESCRIPTION", DEFAULT_DESCRIPTION),
            version=_env_str("API_VERSION", "1.0.0"),
            pesquisas_database_url=_env_str("DB_PESQUISAS_URL", shared_db),
            clientes_database_url=_env_str("DB_CLIENTES_URL", shared_db),
            database_ssl=_env_str("DB_SSL", "require"),
            log_level=_env_str("LOG_LEVEL", "INFO"),
        )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
