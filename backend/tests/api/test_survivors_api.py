"""Survivors API - registration, lookup, location updates and infection reports."""

from app.core.domain_types import INFECTION_THRESHOLD

VALID_SURVIVOR = {
    "name": "  Rick Grimes ",
    "age": 40,
    "gender": "MALE",
    "latitude": 34.0522,
    "longitude": -118.2437,
    "items": [{"name": "Water", "quantity": 2}, {"name": "Rifle", "quantity": 5}],
}


# ─── registration ────────────────────────────────────────────────

async def test_create_survivor_returns_201_with_inventory(client, catalogue):
    res = await client.post("/api/v1/survivors", json=VALID_SURVIVOR)

    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Rick Grimes"
    assert body["gender"] == "male"
    assert body["infected"] is False
    assert body["reports_received"] == []
    assert [(i["name"], i["quantity"]) for i in body["inventory"]] == [
        ("Water", 2), ("Rifle", 5),
    ]


async def test_create_survivor_with_unknown_item(client, catalogue):
    payload = {**VALID_SURVIVOR, "items": [{"name": "Gold", "quantity": 1}]}

    res = await client.post("/api/v1/survivors", json=payload)

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "unknown item: Gold"


async def test_create_survivor_without_items(client, catalogue):
    res = await client.post("/api/v1/survivors", json={**VALID_SURVIVOR, "items": []})

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MISSING_ITEMS"


async def test_create_survivor_with_invalid_gender(client, catalogue):
    res = await client.post("/api/v1/survivors", json={**VALID_SURVIVOR, "gender": "robot"})

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_survivor_with_blank_name(client, catalogue):
    res = await client.post("/api/v1/survivors", json={**VALID_SURVIVOR, "name": "   "})

    assert res.status_code == 400


async def test_get_survivor(client, ledger, catalogue):
    survivor_id = await ledger.survivor("Rick Grimes", {catalogue["soup"]: 4})

    res = await client.get(f"/api/v1/survivors/{survivor_id}")

    assert res.status_code == 200
    assert res.json()["inventory"] == [
        {"item_id": catalogue["soup"], "name": "Soup", "points": 8, "quantity": 4},
    ]


async def test_get_unknown_survivor_returns_404(client):
    res = await client.get("/api/v1/survivors/999")

    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Survivor not found"


# ─── location ────────────────────────────────────────────────────

async def test_update_location(client, ledger):
    survivor_id = await ledger.survivor("Rick Grimes")

    res = await client.patch(
        f"/api/v1/survivors/{survivor_id}/location",
        json={"latitude": 12.5, "longitude": -45.0},
    )

    assert res.status_code == 200
    assert (res.json()["latitude"], res.json()["longitude"]) == (12.5, -45.0)


async def test_update_location_rejects_extra_fields(client, ledger):
    survivor_id = await ledger.survivor("Rick Grimes")

    res = await client.patch(
        f"/api/v1/survivors/{survivor_id}/location",
        json={"latitude": 12.5, "longitude": -45.0, "name": "Negan"},
    )

    assert res.status_code == 400


async def test_update_location_unknown_survivor(client):
    res = await client.patch(
        "/api/v1/survivors/999/location", json={"latitude": 1, "longitude": 1},
    )

    assert res.status_code == 404


# ─── infection reports ───────────────────────────────────────────

async def test_report_returns_accused_view(client, ledger):
    accused = await ledger.survivor("Carl Grimes")
    accuser = await ledger.survivor("Rick Grimes")

    res = await client.post(
        f"/api/v1/survivors/{accused}/reports",
        json={"reporter_id": accuser, "note": "Saw a bite mark on his arm"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["id"] == accused
    assert body["infected"] is False
    assert [(r["accuser_id"], r["note"]) for r in body["reports_received"]] == [
        (accuser, "Saw a bite mark on his arm"),
    ]


async def test_duplicate_report_is_not_stored_twice(client, ledger):
    accused = await ledger.survivor("Carl Grimes")
    accuser = await ledger.survivor("Rick Grimes")

    for note in ("Saw a bite mark on his arm", "Saw a walker ignore him"):
        res = await client.post(
            f"/api/v1/survivors/{accused}/reports",
            json={"reporter_id": accuser, "note": note},
        )
        assert res.status_code == 200

    assert len(res.json()["reports_received"]) == 1
    assert await ledger.report_count(accused) == 1


async def test_threshold_report_flags_infected(client, ledger):
    accused = await ledger.survivor("Carl Grimes")

    for i in range(INFECTION_THRESHOLD):
        accuser = await ledger.survivor(f"Witness {i}")
        res = await client.post(
            f"/api/v1/survivors/{accused}/reports", json={"reporter_id": accuser},
        )
        assert res.json()["infected"] is (i == INFECTION_THRESHOLD - 1)


async def test_self_report_returns_400(client, ledger):
    survivor = await ledger.survivor("Carl Grimes")

    res = await client.post(
        f"/api/v1/survivors/{survivor}/reports", json={"reporter_id": survivor},
    )

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "SELF_ACCUSATION"


async def test_unknown_reporter_returns_400(client, ledger):
    accused = await ledger.survivor("Carl Grimes")

    res = await client.post(
        f"/api/v1/survivors/{accused}/reports", json={"reporter_id": 999},
    )

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "invalid reporterId: 999"


async def test_missing_reporter_returns_400(client, ledger):
    accused = await ledger.survivor("Carl Grimes")

    res = await client.post(f"/api/v1/survivors/{accused}/reports", json={"note": "hm"})

    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "body.reporter_id"


async def test_report_on_unknown_survivor_returns_404(client, ledger):
    accuser = await ledger.survivor("Rick Grimes")

    res = await client.post(
        "/api/v1/survivors/999/reports", json={"reporter_id": accuser},
    )

    assert res.status_code == 404
