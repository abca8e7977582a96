"""
Clientes business logic.

Each operation validates its input, runs its queries in sequence and shapes
the response envelope. Existence checks and the following write are separate
statements; a concurrent request can slip in between them.
"""

from __future__ import annotations

from core import errors, responses
from core.errors import storage_guard
from core.text import normalize_row

from . import repository, schemas
from .repository import ClientesRepository

COLLECTION_PATH = "/api/v1/clientes"


class ClienteNotFound(errors.NotFoundError):
    error = "Cliente não encontrado"
    message = "Não existe um cadastro com este CPF"


def _item_path(cpf: str) -> str:
    return f"{COLLECTION_PATH}/{cpf}"


async def get_cliente(repo: ClientesRepository, cpf: str, *, base_url: str) -> dict:
    with storage_guard("Não foi possível consultar o cadastro", event="cliente_get_failed"):
        row = await repo.get(cpf)

    if row is None:
        raise ClienteNotFound()

    item = responses.link(base_url, _item_path(cpf))
    return responses.success(
        "Cliente encontrado",
        normalize_row(row),
        links={
            "self": item,
            "update": item,
            "delete": item,
            "collection": responses.link(base_url, COLLECTION_PATH),
        },
    )


async def create_cliente(
    repo: ClientesRepository,
    payload: schemas.ClienteCreate | None,
    *,
    base_url: str,
) -> dict:
    payload = payload or schemas.ClienteCreate()
    if not payload.nome or not payload.cpf:
        raise errors.ValidationError(
            "Nome e CPF são obrigatórios",
            error="Dados obrigatórios",
        )

    with storage_guard("Não foi possível cadastrar o cliente", event="cliente_create_failed"):
        already_exists = await repo.exists(payload.cpf)
        if not already_exists:
            row = await repo.insert(
                nome=payload.nome,
                cpf=payload.cpf,
                telefone=payload.telefone,
                estado=payload.estado,
            )

    if already_exists:
        raise errors.ConflictError(
            "Já existe um cadastro com este CPF",
            error="CPF já cadastrado",
        )

    return responses.success(
        "Cliente cadastrado com sucesso",
        normalize_row(row),
        links={
            "self": responses.link(base_url, _item_path(row["cpf"])),
            "collection": responses.link(base_url, COLLECTION_PATH),
        },
    )


async def update_cliente(
    repo: ClientesRepository,
    cpf: str,
    payload: schemas.ClienteUpdate | None,
    *,
    base_url: str,
) -> dict:
    payload = payload or schemas.ClienteUpdate()
    try:
        statement = repository.build_update(
            cpf,
            nome=payload.nome,
            telefone=payload.telefone,
            estado=payload.estado,
        )
    except repository.NothingToUpdate as exc:
        raise errors.ValidationError(
            "Forneça pelo menos um campo para atualizar (nome, telefone, estado)",
            error="Nenhum campo para atualizar",
        ) from exc

    row = None
    with storage_guard("Não foi possível atualizar o cliente", event="cliente_update_failed"):
        if await repo.exists(cpf):
            row = await repo.update(statement)

    # Also covers a row deleted between the existence check and the update.
    if row is None:
        raise ClienteNotFound()

    return responses.success(
        "Cliente atualizado com sucesso",
        normalize_row(row),
        links={
            "self": responses.link(base_url, _item_path(cpf)),
            "collection": responses.link(base_url, COLLECTION_PATH),
        },
    )


async def delete_cliente(repo: ClientesRepository, cpf: str, *, base_url: str) -> dict:
    with storage_guard("Não foi possível deletar o cliente", event="cliente_delete_failed"):
        snapshot = await repo.get(cpf)
        if snapshot is not None:
            await repo.delete(cpf)

    if snapshot is None:
        raise ClienteNotFound()

    collection = responses.link(base_url, COLLECTION_PATH)
    return responses.success(
        "Cliente deletado com sucesso",
        normalize_row(snapshot),
        links={
            "collection": collection,
            "create": collection,
        },
    )
