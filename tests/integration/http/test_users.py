from __future__ import annotations

import pytest


def user_body(userid: str, groups: list[str] | None = None, **overrides) -> dict:
    body = {"first_name": "Jane", "last_name": "Doe", "userid": userid, "groups": groups}
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_create_then_get_returns_fields_and_no_groups(client):
    resp = await client.post("/users", json=user_body("jdoe"))
    assert resp.status_code == 201
    assert resp.json() == {"result": "user jdoe created"}

    resp = await client.get("/users/jdoe")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/json"
    assert resp.json() == {"first_name": "Jane", "last_name": "Doe", "userid": "jdoe", "groups": []}


@pytest.mark.asyncio
async def test_get_unknown_user_is_404(client):
    resp = await client.get("/users/nobody")

    assert resp.status_code == 404
    assert resp.json() == {"error": "user id nobody was not found"}


@pytest.mark.asyncio
async def test_created_user_shows_up_in_group_members(client):
    assert (await client.post("/groups", json={"name": "admins"})).status_code == 201
    assert (await client.post("/users", json=user_body("jdoe", ["admins"]))).status_code == 201

    user = (await client.get("/users/jdoe")).json()
    members = (await client.get("/groups/admins")).json()

    assert user["groups"] == ["admins"]
    assert members == {"userids": ["jdoe"]}


@pytest.mark.asyncio
async def test_unknown_group_in_payload_is_silently_dropped(client):
    resp = await client.post("/users", json=user_body("jdoe", ["does-not-exist"]))
    assert resp.status_code == 201

    resp = await client.get("/users/jdoe")
    assert resp.json()["groups"] == []


@pytest.mark.asyncio
async def test_duplicate_userid_is_400(client):
    assert (await client.post("/users", json=user_body("jdoe"))).status_code == 201

    resp = await client.post("/users", json=user_body("jdoe"))

    assert resp.status_code == 400
    assert "duplicate key" in resp.json()["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["first_name", "last_name", "userid"])
async def test_create_with_missing_field_is_400(client, fake_db, missing):
    body = user_body("jdoe")
    body[missing] = ""

    resp = await client.post("/users", json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "first_name, last_name, and userid must all be populated"}
    assert fake_db.calls == []


@pytest.mark.asyncio
async def test_malformed_body_is_400(client):
    resp = await client.post("/users", content=b"{not json", headers={"content-type": "application/json"})

    assert resp.status_code == 400
    assert "error" in resp.json()


@pytest.mark.asyncio
async def test_update_replaces_fields_and_groups(client):
    await client.post("/groups", json={"name": "admins"})
    await client.post("/groups", json={"name": "ops"})
    await client.post("/users", json=user_body("jdoe", ["admins"]))

    resp = await client.put("/users/jdoe", json=user_body("jdoe", ["ops"], last_name="Roe"))
    assert resp.status_code == 200
    assert resp.json() == {"result": "user jdoe has been updated"}

    user = (await client.get("/users/jdoe")).json()
    assert user["last_name"] == "Roe"
    assert user["groups"] == ["ops"]
    assert (await client.get("/groups/admins")).json() == {"userids": []}


@pytest.mark.asyncio
async def test_update_with_different_body_userid_targets_body_key(client):
    await client.post("/users", json=user_body("jdoe"))

    resp = await client.put("/users/jdoe", json=user_body("someone-else", first_name="Changed"))

    assert resp.status_code == 404
    assert (await client.get("/users/jdoe")).json()["first_name"] == "Jane"


@pytest.mark.asyncio
async def test_update_with_missing_field_is_400(client):
    await client.post("/users", json=user_body("jdoe"))

    resp = await client.put("/users/jdoe", json=user_body("jdoe", first_name=""))

    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_delete_twice_is_200_then_404(client):
    await client.post("/users", json=user_body("jdoe"))

    first = await client.delete("/users/jdoe")
    second = await client.delete("/users/jdoe")

    assert first.status_code == 200
    assert first.json() == {"result": "user jdoe has been deleted"}
    assert second.status_code == 404
    assert "error" in second.json()


@pytest.mark.asyncio
async def test_deleted_user_leaves_group_members(client):
    await client.post("/groups", json={"name": "admins"})
    await client.post("/users", json=user_body("jdoe", ["admins"]))

    await client.delete("/users/jdoe")

    assert (await client.get("/groups/admins")).json() == {"userids": []}


@pytest.mark.asyncio
async def test_store_failure_is_500(client, fake_db):
    fake_db.fail("get_user", ConnectionRefusedError("connection refused"))

    resp = await client.get("/users/jdoe")

    assert resp.status_code == 500
    assert resp.json() == {"error": "connection refused"}
