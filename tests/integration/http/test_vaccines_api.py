from __future__ import annotations

BASE = "/api/v1/vaccines"

VACCINE = {
    "name": "Aftosa",
    "description": "Fiebre aftosa",
    "recommended_age": 6,
    "recommended_situation": "Todo el hato",
    "frequency": "Anual",
}


async def test_vaccine_catalog_and_schedule(client, session_headers):
    headers = await session_headers()
    vaccine = (await client.post(f"{BASE}/", json=VACCINE, headers=headers)).json()
    single_dose = {**VACCINE, "name": "Rabia", "frequency": "Única"}
    once = (await client.post(f"{BASE}/", json=single_dose, headers=headers)).json()

    for vaccine_ids, day in (([vaccine["id"]], "2023-06-15"), ([once["id"]], "2024-01-10")):
        record = {
            "cow_id": "cow-1",
            "vaccine_ids": vaccine_ids,
            "date": day,
            "lot": "L-1",
            "administrator": "Dr. Ruiz",
        }
        resp = await client.post(f"{BASE}/records", json=record, headers=headers)
        assert resp.status_code == 201, resp.text

    schedule = (await client.get(f"{BASE}/schedule", headers=headers)).json()
    assert [(e["vaccine_name"], e["next_date"]) for e in schedule["upcoming"]] == [
        ("Aftosa", "2024-06-15")
    ]
    assert schedule["overdue"] == []
    assert [e["reason"] for e in schedule["unscheduled"]] == ["no recurrence configured"]

    resp = await client.delete(f"{BASE}/{vaccine['id']}", headers=headers)
    assert resp.status_code == 204
    catalog = (await client.get(f"{BASE}/", headers=headers)).json()
    assert [v["name"] for v in catalog["items"]] == ["Rabia"]
    assert [v["name"] for v in catalog["deleted"]] == ["Aftosa"]
    assert catalog["can_undo"] is True

    schedule = (await client.get(f"{BASE}/schedule", headers=headers)).json()
    assert schedule["upcoming"][0]["vaccine_deleted"] is True

    undo = await client.post(f"{BASE}/undo", headers=headers)
    assert undo.status_code == 200
    restored_id = undo.json()["id"]
    records = (await client.get(f"{BASE}/records", headers=headers)).json()
    assert [vaccine["id"]] not in [r["vaccine_ids"] for r in records["items"]]
    assert [restored_id] in [r["vaccine_ids"] for r in records["items"]]

    schedule = (await client.get(f"{BASE}/schedule", headers=headers)).json()
    [upcoming] = schedule["upcoming"]
    assert (upcoming["vaccine_id"], upcoming["vaccine_deleted"]) == (restored_id, False)


async def test_vaccination_record_edits(client, session_headers):
    headers = await session_headers()
    vaccine = (await client.post(f"{BASE}/", json=VACCINE, headers=headers)).json()
    record = {
        "cow_id": "cow-1",
        "vaccine_ids": [vaccine["id"]],
        "date": "2024-06-20",
        "lot": "L-1",
        "administrator": "Dr. Ruiz",
    }
    future = await client.post(f"{BASE}/records", json=record, headers=headers)
    assert future.status_code == 422
    assert future.json()["message"] == (
        "La fecha de vacunación no puede ser superior a la fecha actual."
    )

    created = (
        await client.post(f"{BASE}/records", json={**record, "date": "2024-06-01"}, headers=headers)
    ).json()
    side = await client.put(
        f"{BASE}/records/{created['id']}/side-effects",
        json={"side_effects": "Inflamación leve"},
        headers=headers,
    )
    assert side.json()["side_effects"] == "Inflamación leve"

    edited = await client.put(
        f"{BASE}/records/{created['id']}", json={"lot": "L-2"}, headers=headers
    )
    assert edited.status_code == 200
    assert edited.json()["lot"] == "L-2"

    resp = await client.delete(f"{BASE}/records/{created['id']}", headers=headers)
    assert resp.status_code == 204
    undo = await client.post(f"{BASE}/records/undo", headers=headers)
    assert undo.status_code == 200
    assert undo.json()["side_effects"] == "Inflamación leve"

    again = await client.post(f"{BASE}/records/undo", headers=headers)
    assert again.status_code == 404
    assert again.json()["code"] == "nothing_to_undo"
    assert again.json()["details"] == {"collection": "vaccinationRecords"}
