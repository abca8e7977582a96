"""
Pesquisas API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from core.config import Settings, get_settings

from . import service
from .repository import SORTABLE_COLUMNS, PesquisasRepository, get_pesquisas_repository

router = APIRouter()


@router.get("/pesquisas", summary="Listar pesquisas")
async def list_pesquisas(
    sort: str = Query("id", description=f"Campo para ordenação: {', '.join(SORTABLE_COLUMNS)}"),
    order: str = Query("asc", description="Direção da ordenação: asc ou desc"),
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    repo: PesquisasRepository = Depends(get_pesquisas_repository),
    settings: Settings = Depends(get_settings),
) -> dict:
    """
    Page through pesquisas. Unknown sort fields fall back to `id`.
    """
    return await service.list_pesquisas(
        repo,
        sort=sort,
        order=order,
        limit=limit,
        offset=offset,
        base_url=settings.base_url,
    )
