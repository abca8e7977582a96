"""
Clientes API schemas (request bodies).

Fields are all optional at the schema level: presence is checked in the
service so that a missing `nome`/`cpf` maps to the "Dados obrigatórios"
error instead of a generic validation failure.
Numbers are accepted and kept as text (`"telefone": 11999999999`).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ClienteCreate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    nome: str | None = Field(default=None, examples=["João Silva"])
    cpf: str | None = Field(default=None, examples=["12345678901"])
    telefone: str | None = Field(default=None, examples=["11999999999"])
    estado: str | None = Field(default=None, examples=["SP"])


class ClienteUpdate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    nome: str | None = Field(default=None, examples=["João Silva Santos"])
    telefone: str | None = Field(default=None, examples=["11888888888"])
    estado: str | None = Field(default=None, examples=["RJ"])
