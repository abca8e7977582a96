"""
Pesquisas persistence (read-only, raw SQL against `bd_pesquisa`).
"""

from __future__ import annotations

from fastapi import Request

from core.db import Database

TABLE = "bd_pesquisa"

# ORDER BY cannot be bound as a parameter; only these names ever reach the SQL.
SORTABLE_COLUMNS = ("id", "titulo", "data_criacao")
DEFAULT_SORT = "id"


class PesquisasRepository:
    def __init__(self, database: Database) -> None:
        self.database = database

    async def list_page(self, *, sort: str, descending: bool, limit: int, offset: int) -> list[dict]:
        if sort not in SORTABLE_COLUMNS:
            raise ValueError(f"Unsupported sort column: {sort!r}")
        direction = "DESC" if descending else "ASC"
        return await self.database.fetch_all(
            f"""
            SELECT *
            FROM {TABLE}
            ORDER BY {sort} {direction}
            LIMIT $1 OFFSET $2
            """,
            limit,
            offset,
        )

    async def count(self) -> int:
        total = await self.database.fetch_value(f"SELECT COUNT(*) FROM {TABLE}")
        return int(total or 0)


def get_pesquisas_repository(request: Request) -> PesquisasRepository:
    return PesquisasRepository(request.app.state.pesquisas_db)
