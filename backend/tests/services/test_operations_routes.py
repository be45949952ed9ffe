"""Operation History Endpoints — list, update, delete.

Invariants:
    - PUT returns the storage outcome; unknown ids match nothing, no error
    - DELETE returns 204 whether or not a record matched
    - PUT stores any JSON value (strings, objects, lists) and GET echoes it back
    - Malformed ids return 500 {"error": "Internal server error"} and are logged
"""

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from calculator_api.core.errors import INTERNAL_ERROR_MESSAGE


async def _create(client, path="/add", num1="3", num2="4") -> dict:
    await client.get(path, params={"num1": num1, "num2": num2})
    return (await client.get("/operations")).json()[-1]


async def test_list_empty(client):
    res = await client.get("/operations")
    assert res.status_code == 200
    assert res.json() == []


async def test_update_overwrites_fields(client):
    record = await _create(client)

    res = await client.put(
        f"/operations/{record['id']}",
        json={"operation": "subtraction", "num1": 10, "num2": 4, "result": 6},
    )

    assert res.status_code == 200
    assert res.json() == {"acknowledged": True, "matched_count": 1, "modified_count": 1}
    updated = (await client.get("/operations")).json()[0]
    assert updated["operation"] == "subtraction"
    assert (updated["num1"], updated["num2"], updated["result"]) == (10, 4, 6)
    assert updated["id"] == record["id"]
    assert updated["timestamp"] == record["timestamp"]


async def test_update_accepts_inconsistent_values(client):
    record = await _create(client)
    res = await client.put(
        f"/operations/{record['id']}", json={"result": 1000},
    )
    assert res.status_code == 200
    updated = (await client.get("/operations")).json()[0]
    assert updated["operation"] == "addition"
    assert updated["result"] == 1000


async def test_update_unknown_id_matches_nothing(client):
    res = await client.put(f"/operations/{uuid4()}", json={"result": 1})
    assert res.status_code == 200
    assert res.json()["matched_count"] == 0
    assert res.json()["modified_count"] == 0


async def test_update_malformed_id_returns_500(client, caplog):
    with caplog.at_level(logging.ERROR):
        res = await client.put("/operations/not-an-id", json={"result": 1})
    assert res.status_code == 500
    assert res.json() == {"error": INTERNAL_ERROR_MESSAGE}
    assert "Storage update failed" in caplog.text


async def test_update_with_malformed_json_returns_400(client):
    record = await _create(client)
    res = await client.put(
        f"/operations/{record['id']}",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request data"


async def test_delete_returns_204_and_removes_record(client):
    record = await _create(client)
    res = await client.delete(f"/operations/{record['id']}")
    assert res.status_code == 204
    assert res.content == b""
    assert (await client.get("/operations")).json() == []


async def test_delete_is_idempotent(client):
    record = await _create(client)
    first = await client.delete(f"/operations/{record['id']}")
    second = await client.delete(f"/operations/{record['id']}")
    assert first.status_code == 204
    assert second.status_code == 204


async def test_delete_malformed_id_returns_500(client, caplog):
    with caplog.at_level(logging.ERROR):
        res = await client.delete("/operations/12345")
    assert res.status_code == 500
    assert res.json() == {"error": INTERNAL_ERROR_MESSAGE}
    assert "Storage delete failed" in caplog.text


async def test_update_stores_non_numeric_values_verbatim(client):
    record = await _create(client)

    res = await client.put(
        f"/operations/{record['id']}",
        json={"operation": {"x": 1}, "num1": "abc", "num2": [1, 2], "result": None},
    )

    assert res.status_code == 200
    assert res.json()["matched_count"] == 1
    updated = (await client.get("/operations")).json()[0]
    assert updated["operation"] == {"x": 1}
    assert updated["num1"] == "abc"
    assert updated["num2"] == [1, 2]
    assert updated["result"] is None


async def test_listed_timestamps_are_utc(client):
    record = await _create(client)
    stamp = datetime.fromisoformat(record["timestamp"].replace("Z", "+00:00"))
    assert stamp.utcoffset() == timedelta(0)
