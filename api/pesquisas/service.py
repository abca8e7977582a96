"""
Pesquisas listing: sort/order normalization, paging links and the
synthesized `fonte` field.
"""

from __future__ import annotations

from typing import Any

from core import responses
from core.errors import storage_guard
from core.text import normalize_row

from .repository import DEFAULT_SORT, SORTABLE_COLUMNS, PesquisasRepository

COLLECTION_PATH = "/api/v1/pesquisas"
FONTE_PARTS = ("artigo", "autor", "link")


def resolve_sort(sort: str | None) -> str:
    return sort if sort in SORTABLE_COLUMNS else DEFAULT_SORT


def resolve_order(order: str | None) -> str:
    return "desc" if (order or "").lower() == "desc" else "asc"


def with_fonte(row: dict[str, Any]) -> dict[str, Any]:
    """
    Add `fonte`: artigo, autor and link joined by newlines, skipping empty ones.

    Rows without any of the three are returned as they are.
    """
    parts = [row[key] for key in FONTE_PARTS if row.get(key)]
    if not parts:
        return row
    return {**row, "fonte": "\n".join(str(part) for part in parts)}


def _page_link(base_url: str, *, sort: str, order: str, limit: int, offset: int) -> str:
    return responses.link(base_url, COLLECTION_PATH, sort=sort, order=order, limit=limit, offset=offset)


async def list_pesquisas(
    repo: PesquisasRepository,
    *,
    sort: str | None,
    order: str | None,
    limit: int,
    offset: int,
    base_url: str,
) -> dict:
    sort_field = resolve_sort(sort)
    sort_order = resolve_order(order)

    with storage_guard("Não foi possível buscar as pesquisas", event="pesquisas_list_failed"):
        rows = await repo.list_page(
            sort=sort_field,
            descending=sort_order == "desc",
            limit=limit,
            offset=offset,
        )
        total = await repo.count()

    data = [with_fonte(normalize_row(row)) for row in rows]

    next_offset = offset + limit
    return responses.success(
        "Pesquisas encontradas",
        data,
        meta={
            "total": total,
            "limit": limit,
            "offset": offset,
            "sort": sort_field,
            "order": sort_order.upper(),
        },
        links={
            "self": _page_link(base_url, sort=sort_field, order=sort_order, limit=limit, offset=offset),
            "first": _page_link(base_url, sort=sort_field, order=sort_order, limit=limit, offset=0),
            "next": (
                _page_link(base_url, sort=sort_field, order=sort_order, limit=limit, offset=next_offset)
                if next_offset < total
                else None
            ),
        },
    )
