"""
Async database access helpers (raw SQL) using asyncpg.

Each logical store (pesquisas, clientes) gets its own `Database`, which owns
one connection pool. FastAPI opens the pools on startup and closes them on
shutdown (see `api/main.py`); handlers receive them through dependencies.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

logger = logging.getLogger(__name__)


def _sanitize_database_url(url: str) -> str:
    # asyncpg takes SSL through the `ssl` argument; drop libpq's sslmode.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _ssl_arg(mode: str) -> str | bool:
    mode = (mode or "").strip().lower()
    if mode in {"", "disable", "false", "0"}:
        return False
    return mode


class Database:
    """
    A named asyncpg pool. One instance per logical data store.
    """

    def __init__(self, name: str, url: str, *, ssl: str = "require") -> None:
        self.name = name
        self._url = (url or "").strip()
        self._ssl = ssl
        self._pool: asyncpg.Pool | None = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        if not self._url:
            raise RuntimeError(f"Database URL for '{self.name}' is not set.")
        self._pool = await asyncpg.create_pool(
            dsn=_sanitize_database_url(self._url),
            ssl=_ssl_arg(self._ssl),
            min_size=1,
            max_size=5,
            command_timeout=30,
        )
        logger.info("db_connected name=%s", self.name)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_closed name=%s", self.name)

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError(f"DB pool '{self.name}' is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self.pool().fetchrow(sql, *args)
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self.pool().fetch(sql, *args)
        return [dict(r) for r in rows]

    async def fetch_value(self, sql: str, *args: Any) -> Any:
        return await self.pool().fetchval(sql, *args)

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE). No result returned.
        """
        await self.pool().execute(sql, *args)
