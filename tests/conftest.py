"""Shared fixtures: an app wired to in-memory repositories instead of Postgres."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from clientes.repository import UpdateStatement, get_clientes_repository
from core.config import Settings
from main import create_app
from pesquisas.repository import SORTABLE_COLUMNS, get_pesquisas_repository

API_KEY = "17e393bbdd78b1cb14d30c0a6cf3669b"
BASE_URL = "http://testserver"


class StorageDown(ConnectionError):
    pass


class FakeClientesRepository:
    def __init__(self, rows: list[dict] | None = None) -> None:
        self.rows = {row["cpf"]: dict(row) for row in rows or []}
        self.calls: list[str] = []
        self.fail = False

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if self.fail:
            raise StorageDown("could not connect to server at db.internal:5432")

    async def get(self, cpf: str) -> dict | None:
        self._call("get")
        row = self.rows.get(cpf)
        return dict(row) if row is not None else None

    async def exists(self, cpf: str) -> bool:
        self._call("exists")
        return cpf in self.rows

    async def insert(self, *, nome, cpf, telefone=None, estado=None) -> dict:
        self._call("insert")
        row = {"nome": nome, "cpf": cpf, "telefone": telefone, "estado": estado}
        self.rows[cpf] = row
        return dict(row)

    async def update(self, statement: UpdateStatement) -> dict | None:
        self._call("update")
        row = self.rows.get(statement.cpf)
        if row is None:
            return None
        row.update(dict(statement.assignments))
        return dict(row)

    async def delete(self, cpf: str) -> None:
        self._call("delete")
        self.rows.pop(cpf, None)


class FakePesquisasRepository:
    def __init__(self, rows: list[dict] | None = None) -> None:
        self.rows = [dict(row) for row in rows or []]
        self.fail = False
        self.last_page: dict | None = None

    async def list_page(self, *, sort: str, descending: bool, limit: int, offset: int) -> list[dict]:
        if self.fail:
            raise StorageDown("relation bd_pesquisa does not exist")
        assert sort in SORTABLE_COLUMNS
        self.last_page = {"sort": sort, "descending": descending, "limit": limit, "offset": offset}
        ordered = sorted(self.rows, key=lambda row: row[sort], reverse=descending)
        return [dict(row) for row in ordered[offset : offset + limit]]

    async def count(self) -> int:
        if self.fail:
            raise StorageDown("relation bd_pesquisa does not exist")
        return len(self.rows)


def make_pesquisas(total: int) -> list[dict]:
    return [
        {
            "id": i,
            "titulo": f"Pesquisa {i:02d}",
            "data_criacao": f"2024-01-{i:02d}",
            "pergunta": f"Pergunta {i}",
            "resposta": f"Resposta {i}",
            "artigo": None,
            "autor": None,
            "link": None,
        }
        for i in range(1, total + 1)
    ]


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key=API_KEY, base_url=BASE_URL, rate_limit_max=1000)


@pytest.fixture
def clientes_repo() -> FakeClientesRepository:
    return FakeClientesRepository(
        [
            {"nome": "Maria Souza", "cpf": "11122233344", "telefone": "11988887777", "estado": "SP"},
        ]
    )


@pytest.fixture
def pesquisas_repo() -> FakePesquisasRepository:
    return FakePesquisasRepository(make_pesquisas(5))


@pytest.fixture
def app(settings, clientes_repo, pesquisas_repo):
    application = create_app(settings)
    application.dependency_overrides[get_clientes_repository] = lambda: clientes_repo
    application.dependency_overrides[get_pesquisas_repository] = lambda: pesquisas_repo
    return application


@pytest.fixture
def client(app) -> TestClient:
    # No context manager: the lifespan (and its Postgres pools) never runs.
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"x-api-key": API_KEY}
