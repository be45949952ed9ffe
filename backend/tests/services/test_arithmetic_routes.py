"""Arithmetic Endpoints — compute, persist, respond.

Invariants:
    - Each endpoint returns {operation, result} and leaves exactly one record behind
    - Invalid operands and zero divisors return 400 {error} and persist nothing
    - The record is visible under /operations as soon as the 200 arrives
"""

import pytest

from calculator_api.core.errors import (
    DIVISION_BY_ZERO_MESSAGE, INVALID_OPERANDS_MESSAGE,
)


@pytest.mark.parametrize("path, operation, expected", [
    ("/add", "addition", 7.5),
    ("/subtract", "subtraction", -1.5),
    ("/multiply", "multiplication", 13.5),
    ("/divide", "division", 0.6666666666666666),
])
async def test_arithmetic_endpoints_compute_result(client, path, operation, expected):
    res = await client.get(path, params={"num1": "3", "num2": "4.5"})
    assert res.status_code == 200
    assert res.json() == {"operation": operation, "result": expected}


async def test_add_then_operations_round_trip(client):
    res = await client.get("/add", params={"num1": "3", "num2": "4"})
    assert res.json()["result"] == 7

    records = (await client.get("/operations")).json()
    assert len(records) == 1
    record = records[0]
    assert record["operation"] == "addition"
    assert (record["num1"], record["num2"], record["result"]) == (3, 4, 7)
    assert record["id"]
    assert record["timestamp"]


async def test_divide_by_zero_returns_400_and_persists_nothing(client):
    res = await client.get("/divide", params={"num1": "5", "num2": "0"})
    assert res.status_code == 400
    assert res.json() == {"error": DIVISION_BY_ZERO_MESSAGE}
    assert (await client.get("/operations")).json() == []


async def test_invalid_operand_returns_400_and_persists_nothing(client):
    res = await client.get("/add", params={"num1": "foo", "num2": "2"})
    assert res.status_code == 400
    assert res.json() == {"error": INVALID_OPERANDS_MESSAGE}
    assert (await client.get("/operations")).json() == []


async def test_missing_operand_returns_400(client):
    res = await client.get("/multiply", params={"num1": "2"})
    assert res.status_code == 400
    assert res.json() == {"error": INVALID_OPERANDS_MESSAGE}


async def test_infinite_result_serializes_as_null(client):
    res = await client.get("/multiply", params={"num1": "Infinity", "num2": "2"})
    assert res.status_code == 200
    assert res.json() == {"operation": "multiplication", "result": None}


async def test_each_call_persists_its_own_record(client):
    await client.get("/add", params={"num1": "1", "num2": "1"})
    await client.get("/add", params={"num1": "1", "num2": "1"})
    records = (await client.get("/operations")).json()
    assert len(records) == 2
    assert records[0]["id"] != records[1]["id"]
