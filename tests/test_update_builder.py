"""Partial UPDATE builder for clientes."""

from __future__ import annotations

import pytest

from clientes.repository import NothingToUpdate, build_update


def test_all_fields_follow_fixed_order_and_cpf_is_last() -> None:
    statement = build_update("123", estado="RJ", telefone="2199", nome="Ana")

    assert statement.sql == (
        "UPDATE cadastro_clientes SET nome = $1, telefone = $2, estado = $3 "
        "WHERE cpf = $4 RETURNING nome, cpf, telefone, estado"
    )
    assert statement.args == ["Ana", "2199", "RJ", "123"]


def test_only_present_fields_are_set() -> None:
    statement = build_update("123", estado="MG")

    assert statement.sql.startswith("UPDATE cadastro_clientes SET estado = $1 WHERE cpf = $2")
    assert statement.args == ["MG", "123"]


def test_empty_strings_count_as_absent() -> None:
    statement = build_update("123", nome="", telefone="3199", estado=None)

    assert statement.assignments == (("telefone", "3199"),)
    assert statement.args == ["3199", "123"]


@pytest.mark.parametrize("fields", [{}, {"nome": None}, {"nome": "", "telefone": "", "estado": ""}])
def test_no_fields_signals_nothing_to_update(fields) -> None:
    with pytest.raises(NothingToUpdate):
        build_update("123", **fields)


def test_values_are_bound_not_interpolated() -> None:
    hostile = "x'; DROP TABLE cadastro_clientes; --"

    statement = build_update("123", nome=hostile)

    assert hostile not in statement.sql
    assert statement.args[0] == hostile
