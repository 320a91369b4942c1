from __future__ import annotations


async def test_health_is_public(client):
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_protected_routes_require_identity_token(client):
    resp = await client.get("/api/v1/cows/")
    assert resp.status_code == 401
    assert resp.json()["code"] == "auth_error"


async def test_exchange_returns_storage_session(app, client, token_factory):
    headers = {"Authorization": f"Bearer {token_factory('farmer-1')}"}
    resp = await client.post("/api/v1/auth/storage-session", headers=headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["owner_id"] == "farmer-1"
    assert body["token_type"] == "storage"
    assert body["header"] == app.state.settings.storage_session_header
    assert body["expires_in"] == 3600
    claims = app.state.storage_jwt.decode(body["storage_session"])
    assert claims["typ"] == "storage"
    assert claims["sub"] == "farmer-1"


async def test_storage_routes_require_storage_session(client, token_factory):
    headers = {"Authorization": f"Bearer {token_factory('farmer-1')}"}
    resp = await client.get("/api/v1/cows/", headers=headers)
    assert resp.status_code == 401
    assert resp.json()["message"] == "Missing storage session"


async def test_invalid_storage_session_fails_closed(app, client, token_factory):
    headers = {
        "Authorization": f"Bearer {token_factory('farmer-1')}",
        app.state.settings.storage_session_header: "not-a-token",
    }
    resp = await client.get("/api/v1/cows/", headers=headers)
    assert resp.status_code == 401


async def test_storage_session_of_another_caller_is_rejected(
    app, client, token_factory, session_headers
):
    foreign = await session_headers("farmer-2")
    header = app.state.settings.storage_session_header
    headers = {
        "Authorization": f"Bearer {token_factory('farmer-1')}",
        header: foreign[header],
    }
    resp = await client.get("/api/v1/cows/", headers=headers)
    assert resp.status_code == 401
    assert resp.json()["message"] == "Storage session belongs to another caller"


async def test_storage_session_is_not_an_identity_token(app, client, session_headers):
    headers = await session_headers("farmer-1")
    storage_token = headers[app.state.settings.storage_session_header]
    resp = await client.post(
        "/api/v1/auth/storage-session", headers={"Authorization": f"Bearer {storage_token}"}
    )
    assert resp.status_code == 401


async def test_owners_do_not_see_each_other(client, session_headers):
    mine = await session_headers("farmer-1")
    theirs = await session_headers("farmer-2")
    payload = {"name": "Manchas", "breed": "Holstein", "birth_date": "2020-03-01"}
    resp = await client.post("/api/v1/cows/", json=payload, headers=mine)
    assert resp.status_code == 201

    resp = await client.get("/api/v1/cows/", headers=theirs)
    assert resp.status_code == 200
    assert resp.json()["items"] == []
