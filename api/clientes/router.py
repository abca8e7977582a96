"""
Clientes API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.config import Settings, get_settings

from . import schemas, service
from .repository import ClientesRepository, get_clientes_repository

router = APIRouter(prefix="/clientes")


@router.get("/{cpf}", summary="Consultar cliente por CPF")
async def get_cliente(
    cpf: str,
    repo: ClientesRepository = Depends(get_clientes_repository),
    settings: Settings = Depends(get_settings),
) -> dict:
    return await service.get_cliente(repo, cpf, base_url=settings.base_url)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Cadastrar novo cliente")
async def create_cliente(
    payload: schemas.ClienteCreate | None = None,
    repo: ClientesRepository = Depends(get_clientes_repository),
    settings: Settings = Depends(get_settings),
) -> dict:
    return await service.create_cliente(repo, payload, base_url=settings.base_url)


@router.put("/{cpf}", summary="Atualizar cliente")
async def update_cliente(
    cpf: str,
    payload: schemas.ClienteUpdate | None = None,
    repo: ClientesRepository = Depends(get_clientes_repository),
    settings: Settings = Depends(get_settings),
) -> dict:
    """
    Update any subset of nome, telefone and estado. At least one is required.
    """
    return await service.update_cliente(repo, cpf, payload, base_url=settings.base_url)


@router.delete("/{cpf}", summary="Deletar cliente")
async def delete_cliente(
    cpf: str,
    repo: ClientesRepository = Depends(get_clientes_repository),
    settings: Settings = Depends(get_settings),
) -> dict:
    """
    Delete a cliente and return the record as it was before deletion.
    """
    return await service.delete_cliente(repo, cpf, base_url=settings.base_url)
