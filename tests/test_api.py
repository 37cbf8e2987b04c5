from decimal import Decimal


def create_category(client, name="Internet"):
    response = client.post("/api/categories", json={"name": name, "ts_flag": True, "ts_percent": 5})
    assert response.status_code == 201
    return response.json()["id"]


def test_root(client):
    assert client.get("/").json() == {"status": "ok"}


def test_category_endpoints(client):
    category_id = create_category(client)

    response = client.get(f"/api/categories/{category_id}")
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Internet"
    assert body["ts_flag"] is True
    assert Decimal(str(body["ts_percent"])) == Decimal("5")

    response = client.put(f"/api/categories/{category_id}", json={"name": "Broadband"})
    assert response.status_code == 200
    assert response.json()["name"] == "Broadband"

    assert [c["name"] for c in client.get("/api/categories").json()] == ["Broadband"]


def test_duplicate_category_reports_conflict(client):
    create_category(client)
    response = client.post("/api/categories", json={"name": "Internet"})
    assert response.status_code == 409
    assert response.json() == {
        "error": "Category Entry Error",
        "message": "Category exists in database.",
        "code": 409,
    }
    assert len(client.get("/api/categories").json()) == 1


def test_missing_category(client):
    response = client.get("/api/categories/77")
    assert response.status_code == 404
    assert response.json()["message"] == "Unable to locate record"


def test_plan_lifecycle(client):
    category_id = create_category(client)
    plan = {
        "name": "Basic",
        "min_cost": 10,
        "max_cost": 50,
        "tier1_term": "12mo",
        "tier1_cost": 29.99,
        "tier1_sku": "BASIC-12",
    }

    response = client.post(f"/api/categories/{category_id}/plans", json=plan)
    assert response.status_code == 201
    assert response.json() == {"category_id": category_id, "plan_id": 1}
    assert client.post(f"/api/categories/{category_id}/plans", json=plan).json()["plan_id"] == 2

    assert client.delete(f"/api/categories/{category_id}/plans/1").json()["deleted"] == 1
    assert client.delete(f"/api/categories/{category_id}/plans/1").json()["deleted"] == 0

    plans = client.get(f"/api/categories/{category_id}/plans").json()
    assert [p["plan_id"] for p in plans] == [2]
    assert Decimal(str(plans[0]["tier1_cost"])) == Decimal("29.99")


def test_plan_patch_and_clear(client):
    category_id = create_category(client)
    client.post(f"/api/categories/{category_id}/plans", json={
        "name": "Basic", "tier1_term": "12mo", "tier1_cost": "29.99", "tier1_sku": "BASIC-12",
        "tier2_term": "24mo", "tier2_cost": "49.99", "tier2_sku": "BASIC-24",
    })

    response = client.patch(f"/api/categories/{category_id}/plans/1", json={})
    assert response.json()["updated"] == 0

    response = client.patch(f"/api/categories/{category_id}/plans/1", json={"name": "Pro", "tier2_term": None})
    assert response.json()["updated"] == 1

    plan = client.get(f"/api/categories/{category_id}/plans/1").json()
    assert plan["name"] == "Pro"
    assert plan["tier2_term"] is None
    assert plan["tier2_sku"] == "BASIC-24"

    response = client.patch(f"/api/categories/{category_id}/plans/1", json={"tier1_sku": None})
    assert response.status_code == 406


def test_invalid_plan_reports_entry_error(client):
    category_id = create_category(client)
    response = client.post(f"/api/categories/{category_id}/plans", json={
        "name": "Basic", "min_cost": "abc", "tier1_term": "12mo", "tier1_cost": "1", "tier1_sku": "B",
    })
    assert response.status_code == 406
    assert response.json()["error"] == "Plan Entry Error"
    assert response.json()["message"] == "The minimum cost is not a valid value."


def test_bad_tier2_cost_reports_entry_error(client):
    category_id = create_category(client)
    response = client.post(f"/api/categories/{category_id}/plans", json={
        "name": "Basic", "tier1_term": "12mo", "tier1_cost": "1", "tier1_sku": "B", "tier2_cost": "abc",
    })
    assert response.status_code == 406
    assert response.json() == {
        "error": "Plan Entry Error",
        "message": "Tier 2 cost is not a valid value.",
        "code": 406,
    }
    assert client.get(f"/api/categories/{category_id}/plans").json() == []


def test_oversized_values_report_entry_error(client):
    category_id = create_category(client)
    response = client.post(f"/api/categories/{category_id}/addons", json={"title": "Static IP", "cost": 5, "sku": "S" * 60})
    assert response.status_code == 406
    assert response.json()["error"] == "Addon Entry Error"

    response = client.post(f"/api/categories/{category_id}/plans", json={
        "tier1_term": "12mo", "tier1_cost": "29.999", "tier1_sku": "B",
    })
    assert response.status_code == 406

    response = client.post(f"/api/categories/{category_id}/plans", json={
        "tier1_term": "12mo", "tier1_cost": "29.99", "tier1_sku": "B",
    })
    assert response.status_code == 201
    assert client.get(f"/api/categories/{category_id}/plans/1").json()["name"] is None


def test_plan_under_missing_category(client):
    response = client.post("/api/categories/9/plans", json={
        "name": "Basic", "tier1_term": "12mo", "tier1_cost": "1", "tier1_sku": "B",
    })
    assert response.status_code == 404


def test_addon_endpoints(client):
    category_id = create_category(client)
    response = client.post(f"/api/categories/{category_id}/addons", json={"title": "Static IP", "cost": 5, "sku": "IP-1"})
    assert response.status_code == 201
    assert response.json()["addon_id"] == 1

    assert client.get(f"/api/categories/{category_id}/addons/2").status_code == 404
    addon = client.get(f"/api/categories/{category_id}/addons/1").json()
    assert addon["title"] == "Static IP"


def test_register_credential(client):
    response = client.post("/api/credentials", json={"name": "Acme", "username": "acme", "password": "s3cret"})
    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "acme"
    assert len(body["api_key"]) == 32

    response = client.post("/api/credentials", json={"name": "Acme", "username": "acme"})
    assert response.status_code == 406
