"""
Clientes persistence (raw SQL against `cadastro_clientes`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import Request

from core.db import Database

TABLE = "cadastro_clientes"
COLUMNS = "nome, cpf, telefone, estado"

# Assignment order for partial updates; only affects parameter numbering.
UPDATABLE_FIELDS = ("nome", "telefone", "estado")


class NothingToUpdate(ValueError):
    pass


@dataclass(frozen=True)
class UpdateStatement:
    cpf: str
    assignments: tuple[tuple[str, Any], ...]

    @property
    def sql(self) -> str:
        sets = ", ".join(f"{column} = ${i}" for i, (column, _) in enumerate(self.assignments, start=1))
        where = len(self.assignments) + 1
        return f"UPDATE {TABLE} SET {sets} WHERE cpf = ${where} RETURNING {COLUMNS}"

    @property
    def args(self) -> list[Any]:
        return [value for _, value in self.assignments] + [self.cpf]


def build_update(
    cpf: str,
    *,
    nome: str | None = None,
    telefone: str | None = None,
    estado: str | None = None,
) -> UpdateStatement:
    """
    Build a partial UPDATE setting only the fields that carry a value.

    Empty strings count as absent. Raises `NothingToUpdate` when no field is
    left, so callers never issue a no-op write.
    """
    values = {"nome": nome, "telefone": telefone, "estado": estado}
    assignments = tuple((column, values[column]) for column in UPDATABLE_FIELDS if values[column])
    if not assignments:
        raise NothingToUpdate("No updatable field supplied.")
    return UpdateStatement(cpf=cpf, assignments=assignments)


class ClientesRepository:
    def __init__(self, database: Database) -> None:
        self.database = database

    async def get(self, cpf: str) -> dict | None:
        return await self.database.fetch_one(
            f"""
            SELECT {COLUMNS}
            FROM {TABLE}
            WHERE cpf = $1
            """,
            cpf,
        )

    async def exists(self, cpf: str) -> bool:
        row = await self.database.fetch_one(
            f"""
            SELECT cpf
            FROM {TABLE}
            WHERE cpf = $1
            """,
            cpf,
        )
        return row is not None

    async def insert(
        self,
        *,
        nome: str,
        cpf: str,
        telefone: str | None = None,
        estado: str | None = None,
    ) -> dict:
        row = await self.database.fetch_one(
            f"""
            INSERT INTO {TABLE} (nome, cpf, telefone, estado)
            VALUES ($1, $2, $3, $4)
            RETURNING {COLUMNS}
            """,
            nome,
            cpf,
            telefone,
            estado,
        )
        if row is None:
            raise RuntimeError("Failed to insert cliente.")
        return row

    async def update(self, statement: UpdateStatement) -> dict | None:
        return await self.database.fetch_one(statement.sql, *statement.args)

    async def delete(self, cpf: str) -> None:
        await self.database.execute(
            f"""
            DELETE FROM {TABLE}
            WHERE cpf = $1
            """,
            cpf,
        )


def get_clientes_repository(request: Request) -> ClientesRepository:
    return ClientesRepository(request.app.state.clientes_db)
