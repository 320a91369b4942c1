from __future__ import annotations

BASE = "/api/v1/milk"


async def test_production_series_and_details(client, session_headers):
    headers = await session_headers()
    cow = (
        await client.post(f"{BASE}/cows", json={"name": "Blanca", "tag": "A-1"}, headers=headers)
    ).json()

    rows = [
        {"cow_id": cow["id"], "date": "2024-05-01", "morning": 10, "evening": 5},
        {"cow_id": "ghost", "date": "2024-05-01", "morning": 8},
        {"cow_id": cow["id"], "date": "2024-05-09", "morning": 12, "afternoon": 0},
    ]
    for row in rows:
        resp = await client.post(f"{BASE}/productions", json=row, headers=headers)
        assert resp.status_code == 201, resp.text
    assert resp.json()["total"] == "12"

    daily = (await client.get(f"{BASE}/productions/series", headers=headers)).json()
    assert daily["period"] == "daily"
    assert [(p["label"], p["total"]) for p in daily["points"]] == [
        ("2024-05-01", "23"),
        ("2024-05-09", "12"),
    ]

    weekly = (
        await client.get(f"{BASE}/productions/series", params={"period": "weekly"}, headers=headers)
    ).json()
    assert [(p["label"], p["total"]) for p in weekly["points"]] == [
        ("2024-W1", "11.50"),
        ("2024-W2", "12.00"),
    ]

    details = (
        await client.get(
            f"{BASE}/productions/details", params={"date": "2024-05-01"}, headers=headers
        )
    ).json()
    assert [(d["cow_name"], d["total"]) for d in details["items"]] == [
        ("Blanca", "15"),
        ("Desconocido", "8"),
    ]

    bad = await client.get(
        f"{BASE}/productions/series", params={"period": "yearly"}, headers=headers
    )
    assert bad.status_code == 422


async def test_production_edit_recomputes_total(client, session_headers):
    headers = await session_headers()
    created = (
        await client.post(
            f"{BASE}/productions",
            json={"cow_id": "c1", "date": "2024-06-01", "morning": 9, "quality": {"fat": 3.5}},
            headers=headers,
        )
    ).json()
    assert created["quality"]["fat"] == "3.5"

    updated = await client.put(
        f"{BASE}/productions/{created['id']}", json={"evening": 6}, headers=headers
    )
    assert updated.status_code == 200
    assert updated.json()["total"] == "15"

    negative = await client.put(
        f"{BASE}/productions/{created['id']}", json={"morning": -1}, headers=headers
    )
    assert negative.status_code == 422


async def test_incidents_and_undo(client, session_headers):
    headers = await session_headers()
    resp = await client.post(
        f"{BASE}/incidents",
        json={"cow_id": "general", "date": "2024-06-02", "description": "Corte de luz"},
        headers=headers,
    )
    assert resp.status_code == 201
    incident = resp.json()
    assert incident["cow_id"] is None
    assert incident["type"] == "other"

    resp = await client.delete(f"{BASE}/incidents/{incident['id']}", headers=headers)
    assert resp.status_code == 204
    listing = (await client.get(f"{BASE}/incidents", headers=headers)).json()
    assert listing["items"] == []
    assert listing["can_undo"] is True

    undo = await client.post(f"{BASE}/incidents/undo", headers=headers)
    assert undo.json()["description"] == "Corte de luz"
