"""
HTTP tests: /api/estimates and /api/pricing through the FastAPI app.
"""

from paint_estimator.estimate_store import ESTIMATES_KEY
from paint_estimator.storage import SqlKeyValueStore

ROOM = {
    "name": "Living",
    "length": 10, "width": 12, "height": 9,
    "components": [{"type": "Walls"}],
}


def _estimate_payload(**overrides):
    payload = {
        "client_name": "Jane Homeowner",
        "client_email": "jane@example.com",
        "project_address": "12 Elm St",
        "project_category": "Interior",
        "interior_rooms": [ROOM],
        "additional_costs": 50,
    }
    payload.update(overrides)
    return payload


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


# ============================================================
# Estimates
# ============================================================

def test_calculate_does_not_store(client):
    response = client.post("/api/estimates/calculate", json=_estimate_payload())
    assert response.status_code == 200
    data = response.json()
    assert data["line_items"][0]["total"] == 792.0
    assert data["line_items"][0]["unit"] == "sq ft"
    assert data["breakdown"]["additional_costs"] == 50.0
    assert data["missing_pricing"] == []
    assert client.get("/api/estimates/").json() == []


def test_calculate_rejects_bad_input(client):
    response = client.post("/api/estimates/calculate",
                           json=_estimate_payload(client_email="not-an-email"))
    assert response.status_code == 422
    response = client.post("/api/estimates/calculate",
                           json=_estimate_payload(quality_tier="Luxury"))
    assert response.status_code == 422


def test_estimate_lifecycle(client):
    created = client.post("/api/estimates/", json=_estimate_payload())
    assert created.status_code == 200
    record = created.json()
    assert record["id"]
    assert record["valid_until"] > record["created_at"]
    assert record["breakdown"]["total"] > 0

    listed = client.get("/api/estimates/").json()
    assert [r["id"] for r in listed] == [record["id"]]

    summaries = client.get("/api/estimates/summaries").json()
    assert summaries[0]["total"] == record["breakdown"]["total"]

    fetched = client.get(f"/api/estimates/{record['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["line_items"] == record["line_items"]

    assert client.delete(f"/api/estimates/{record['id']}").json() == {"ok": True}
    assert client.get(f"/api/estimates/{record['id']}").status_code == 404


def test_unknown_estimate_404(client):
    assert client.get("/api/estimates/does-not-exist").status_code == 404
    assert client.delete("/api/estimates/does-not-exist").status_code == 404


def test_unreadable_saved_estimates_are_kept(client, db):
    legacy = '[{"id": "legacy-1", "createdAt": "2024-01-01"}]'
    SqlKeyValueStore(db).set(ESTIMATES_KEY, legacy)

    assert client.get("/api/estimates/").json() == []
    assert client.post("/api/estimates/", json=_estimate_payload()).status_code == 409
    assert client.delete("/api/estimates/legacy-1").status_code == 409

    db.expire_all()
    assert SqlKeyValueStore(db).get(ESTIMATES_KEY) == legacy


def test_missing_pricing_is_reported(client):
    room = dict(ROOM, surface_type="Wood")
    data = client.post("/api/estimates/calculate",
                       json=_estimate_payload(interior_rooms=[room])).json()
    assert data["missing_pricing"] == ["Wood / interior walls under 10' high"]
    assert data["line_items"][0]["total"] == 0.0


# ============================================================
# Pricing
# ============================================================

def test_pricing_snapshot(client):
    data = client.get("/api/pricing/").json()
    assert len(data["entries"]) > 20
    assert data["coating_modifiers"]["spot+1coat"] == 0.5
    assert data["quality_modifiers"]["High End"] == 1.5
    assert data["stain_modifiers"]["custom"] == 2.0


def test_rate_preview(client):
    response = client.get("/api/pricing/rate", params={
        "substrate_type": "Gypsum board",
        "description": "interior ceilings",
        "coating_tier": "spot+1coat",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["unit_price"] == 1.1
    assert data["missing"] is False

    missing = client.get("/api/pricing/rate", params={
        "substrate_type": "Wood", "description": "pergola",
    }).json()
    assert missing["missing"] is True


def test_descriptions(client):
    data = client.get("/api/pricing/descriptions", params={"substrate_type": "Doors"}).json()
    assert "wood slab no frame" in data


def test_override_changes_pricing(client):
    response = client.put("/api/pricing/overrides/customQualityModifiers", json={"Commercial": 1.1})
    assert response.status_code == 200
    assert client.get("/api/pricing/overrides").json()["customQualityModifiers"] is True
    assert client.get("/api/pricing/overrides/customQualityModifiers").json() == {"Commercial": 1.1}

    data = client.post("/api/estimates/calculate", json=_estimate_payload()).json()
    assert data["line_items"][0]["unit_price"] == 2.2

    assert client.delete("/api/pricing/overrides/customQualityModifiers").json() == {"ok": True}
    data = client.post("/api/estimates/calculate", json=_estimate_payload()).json()
    assert data["line_items"][0]["unit_price"] == 2.0


def test_custom_pricing_override(client):
    response = client.put("/api/pricing/overrides/customPricing", json=[
        {"substrate_type": "Gypsum board", "description": "interior walls under 10' high",
         "unit": "sq ft", "base_rate": 1.5},
    ])
    assert response.status_code == 200
    data = client.post("/api/estimates/calculate", json=_estimate_payload()).json()
    assert data["line_items"][0]["total"] == 594.0

    assert client.delete("/api/pricing/overrides").json() == {"ok": True}
    assert client.get("/api/pricing/overrides/customPricing").status_code == 404


def test_invalid_override_rejected(client):
    response = client.put("/api/pricing/overrides/customCoatingModifiers", json={"spot+1coat": -2})
    assert response.status_code == 422
    assert client.get("/api/pricing/overrides/customCoatingModifiers").status_code == 404


def test_unknown_override_key(client):
    assert client.put("/api/pricing/overrides/customEverything", json=[]).status_code == 400
    assert client.get("/api/pricing/overrides/customEverything").status_code == 400
    assert client.delete("/api/pricing/overrides/customEverything").status_code == 400
