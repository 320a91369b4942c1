from __future__ import annotations

BASE = "/api/v1/calves"


async def test_calf_records(client, session_headers):
    headers = await session_headers()
    options = (await client.get(f"{BASE}/options", headers=headers)).json()
    assert "Destete" in options["milestones"]
    assert options["feeding_types"][0] == "Leche materna"

    payload = {"name": "Pinta", "birth_date": "2024-05-01", "mother_cow_id": "cow-1", "weight": 35}
    resp = await client.post(f"{BASE}/", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    calf = resp.json()
    assert calf["gender"] == "female"

    feeding = await client.post(
        f"{BASE}/{calf['id']}/feeding-records",
        json={"date": "2024-06-01", "type": "Leche materna", "amount": 4, "unit": "litros"},
        headers=headers,
    )
    assert feeding.status_code == 201
    assert feeding.json()["amount"] == "4"

    bad_unit = await client.post(
        f"{BASE}/{calf['id']}/feeding-records",
        json={"date": "2024-06-01", "type": "Heno", "amount": 1, "unit": "sacos"},
        headers=headers,
    )
    assert bad_unit.status_code == 422

    milestone = await client.post(
        f"{BASE}/{calf['id']}/growth-milestones",
        json={"date": "2024-06-10", "description": "Primer peso"},
        headers=headers,
    )
    assert milestone.status_code == 201

    listing = (await client.get(f"{BASE}/", headers=headers)).json()
    [stored] = listing["items"]
    assert [r["type"] for r in stored["feeding_records"]] == ["Leche materna"]
    assert [m["description"] for m in stored["growth_milestones"]] == ["Primer peso"]


async def test_calf_gender_must_be_known(client, session_headers):
    headers = await session_headers()
    payload = {"name": "Pinta", "birth_date": "2024-05-01", "gender": "otro"}
    resp = await client.post(f"{BASE}/", json=payload, headers=headers)
    assert resp.status_code == 422
