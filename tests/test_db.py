"""Postgres helpers and repository SQL, checked without a real database."""

from __future__ import annotations

import pytest

from clientes.repository import ClientesRepository, build_update
from core import db
from pesquisas.repository import PesquisasRepository


class RecordingDatabase:
    def __init__(self, result=None) -> None:
        self.result = result
        self.queries: list[tuple[str, tuple]] = []

    async def fetch_one(self, sql, *args):
        self.queries.append((sql, args))
        return self.result

    async def fetch_all(self, sql, *args):
        self.queries.append((sql, args))
        return []

    async def fetch_value(self, sql, *args):
        self.queries.append((sql, args))
        return self.result

    async def execute(self, sql, *args):
        self.queries.append((sql, args))


def test_sanitize_database_url_drops_sslmode_only() -> None:
    url = "postgresql://u:p@host:5432/db?sslmode=require&application_name=api"

    assert db._sanitize_database_url(url) == "postgresql://u:p@host:5432/db?application_name=api"
    assert db._sanitize_database_url("postgresql://host/db") == "postgresql://host/db"


@pytest.mark.parametrize("mode,expected", [("require", "require"), ("disable", False), ("", False), ("VERIFY-FULL", "verify-full")])
def test_ssl_argument(mode, expected) -> None:
    assert db._ssl_arg(mode) == expected


def test_pool_before_connect_raises() -> None:
    database = db.Database("clientes", "postgresql://host/db")

    assert database.is_connected is False
    with pytest.raises(RuntimeError):
        database.pool()


@pytest.mark.asyncio
async def test_connect_without_url_raises() -> None:
    with pytest.raises(RuntimeError, match="pesquisas"):
        await db.Database("pesquisas", "").connect()


@pytest.mark.asyncio
async def test_close_without_pool_is_a_noop() -> None:
    await db.Database("clientes", "postgresql://host/db").close()


@pytest.mark.asyncio
async def test_clientes_update_runs_built_statement() -> None:
    database = RecordingDatabase(result={"nome": "Ana", "cpf": "1", "telefone": None, "estado": "RJ"})
    repo = ClientesRepository(database)

    row = await repo.update(build_update("1", estado="RJ"))

    sql, args = database.queries[0]
    assert "SET estado = $1 WHERE cpf = $2" in sql
    assert args == ("RJ", "1")
    assert row["estado"] == "RJ"


@pytest.mark.asyncio
async def test_clientes_exists_reflects_lookup() -> None:
    assert await ClientesRepository(RecordingDatabase(result={"cpf": "1"})).exists("1") is True
    assert await ClientesRepository(RecordingDatabase(result=None)).exists("1") is False


@pytest.mark.asyncio
async def test_pesquisas_page_query_uses_allowed_column_and_binds_paging() -> None:
    database = RecordingDatabase()
    repo = PesquisasRepository(database)

    await repo.list_page(sort="data_criacao", descending=True, limit=10, offset=20)

    sql, args = database.queries[0]
    assert "ORDER BY data_criacao DESC" in sql
    assert "LIMIT $1 OFFSET $2" in sql
    assert args == (10, 20)


@pytest.mark.asyncio
async def test_pesquisas_page_rejects_unknown_column() -> None:
    with pytest.raises(ValueError):
        await PesquisasRepository(RecordingDatabase()).list_page(
            sort="id; DROP TABLE bd_pesquisa",
            descending=False,
            limit=1,
            offset=0,
        )


@pytest.mark.asyncio
async def test_pesquisas_count_handles_empty_result() -> None:
    assert await PesquisasRepository(RecordingDatabase(result=None)).count() == 0
    assert await PesquisasRepository(RecordingDatabase(result=12)).count() == 12
