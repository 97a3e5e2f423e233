from fastapi.testclient import TestClient

from main import app

SERVER_ASSIGNED = {"id", "createdAt", "updatedAt", "status"}

ORDER_FIELDS = {
    "id", "orderNumber", "itemName", "filamentType", "filamentColor", "quantity",
    "shipBy", "notes", "status", "createdAt", "updatedAt",
}


def create(client, payload):
    response = client.post("/api/orders", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["timestamp"].endswith("Z")
    assert "X-Request-ID" in response.headers
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_create_order(client, order_payload):
    order_payload["status"] = "archived"
    order_payload["internal"] = "ignored"

    body = create(client, order_payload)

    assert set(body) == ORDER_FIELDS
    assert body["status"] == "pending"
    assert body["createdAt"] == body["updatedAt"]
    assert body["shipBy"] == "2024-01-10T00:00:00.000Z"


def test_round_trip(client, order_payload):
    created = create(client, order_payload)

    listed = client.get("/api/orders").json()

    assert listed == [created]
    for key, value in order_payload.items():
        assert listed[0][key] == value
    assert client.get(f"/api/orders/{created['id']}").json() == created


def test_create_missing_quantity(client, order_payload):
    del order_payload["quantity"]
    response = client.post("/api/orders", json=order_payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing or invalid fields: quantity"}


def test_create_non_positive_quantity(client, order_payload):
    for quantity in (0, -3):
        order_payload["quantity"] = quantity
        response = client.post("/api/orders", json=order_payload)
        assert response.status_code == 400
        assert "quantity" in response.json()["error"]
    assert client.get("/api/orders").json() == []


def test_create_missing_all_strings(client):
    response = client.post("/api/orders", json={"quantity": 1})
    assert response.status_code == 400
    assert response.json() == {
        "error": "Missing or invalid fields: orderNumber, itemName, filamentType, filamentColor"
    }


def test_create_without_body(client):
    response = client.post("/api/orders")
    assert response.status_code == 400
    assert response.json()["error"].startswith("Missing or invalid fields: orderNumber")


def test_create_with_malformed_json(client):
    response = client.post(
        "/api/orders", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_invalid_ship_by_is_dropped(client, order_payload):
    order_payload["shipBy"] = "whenever"
    assert create(client, order_payload)["shipBy"] is None


def test_listing_order(client, order_payload):
    for name, ship_by in (("A", "2024-01-10"), ("B", None), ("C", "2024-01-05")):
        create(client, {**order_payload, "orderNumber": name, "shipBy": ship_by})

    listed = client.get("/api/orders").json()
    assert [order["orderNumber"] for order in listed] == ["C", "A", "B"]


def test_listing_filters(client, order_payload):
    first = create(client, {**order_payload, "orderNumber": "1"})
    create(client, {**order_payload, "orderNumber": "2"})
    client.patch(f"/api/orders/{first['id']}/status", json={"status": "completed"})

    everything = client.get("/api/orders").json()
    assert client.get("/api/orders", params={"status": "all"}).json() == everything
    assert len(everything) == 2

    completed = client.get("/api/orders", params={"status": "COMPLETED"}).json()
    assert [order["orderNumber"] for order in completed] == ["1"]
    assert all(order["status"] == "completed" for order in completed)

    pending = client.get("/api/orders", params={"status": "pending"}).json()
    assert [order["orderNumber"] for order in pending] == ["2"]


def test_update_status(client, order_payload):
    created = create(client, order_payload)

    response = client.patch(f"/api/orders/{created['id']}/status", json={"status": "archived"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "archived"
    assert body["updatedAt"] >= body["createdAt"]
    assert body["orderNumber"] == created["orderNumber"]


def test_update_status_bogus_leaves_order_alone(client, order_payload):
    created = create(client, order_payload)

    response = client.patch(f"/api/orders/{created['id']}/status", json={"status": "bogus"})

    assert response.status_code == 400
    assert response.json() == {"error": "status must be one of: pending, completed, archived"}
    assert client.get(f"/api/orders/{created['id']}").json() == created


def test_update_status_unknown_id(client):
    response = client.patch("/api/orders/missing/status", json={"status": "completed"})
    assert response.status_code == 404
    assert response.json() == {"error": "Order not found"}


def test_delete(client, order_payload):
    created = create(client, order_payload)

    response = client.delete(f"/api/orders/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created
    assert client.get("/api/orders").json() == []


def test_delete_unknown_id_leaves_store_alone(client, order_payload):
    created = create(client, order_payload)

    response = client.delete("/api/orders/missing")

    assert response.status_code == 404
    assert response.json() == {"error": "Order not found"}
    assert client.get("/api/orders").json() == [created]


def test_get_unknown_id(client):
    response = client.get("/api/orders/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Order not found"}


def test_unexpected_errors_are_hidden(client, mocker):
    mocker.patch(
        "print_queue.orders.service.OrderStore.list_orders",
        side_effect=RuntimeError("disk on fire"),
    )
    with TestClient(app, raise_server_exceptions=False) as quiet_client:
        response = quiet_client.get("/api/orders")

    assert response.status_code == 500
    assert response.json() == {"error": "Unexpected server error"}
    assert response.headers["X-Request-ID"]
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert response.headers["Referrer-Policy"] == "no-referrer"


def test_create_with_oversized_quantity(client, order_payload):
    order_payload["quantity"] = 1e20
    del order_payload["itemName"]

    response = client.post("/api/orders", json=order_payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing or invalid fields: itemName, quantity"}
    assert client.get("/api/orders").json() == []


def test_non_string_scalars_are_stored_as_text(client, order_payload):
    order_payload.update({"orderNumber": 1001.0, "itemName": True, "notes": 0})

    body = create(client, order_payload)

    assert body["orderNumber"] == "1001"
    assert body["itemName"] == "true"
    assert body["notes"] == ""


def test_numeric_ship_by_counts_milliseconds(client, order_payload):
    order_payload["shipBy"] = 1700000000
    assert create(client, order_payload)["shipBy"] == "1970-01-20T16:13:20.000Z"

    order_payload["shipBy"] = 0
    assert create(client, order_payload)["shipBy"] is None
