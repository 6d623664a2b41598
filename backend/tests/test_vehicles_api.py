"""HTTP contract of the vehicle routes: status codes and response envelopes."""
from vehicle_rental.api.v1.vehicles import get_vehicle_store
from vehicle_rental.core.exceptions import StorageError
from vehicle_rental.repositories.vehicle_repository import InMemoryVehicleStore

VEHICLES_URL = "/api/v1/vehicles/"


def test_vehicles_full_crud_flow(client, vehicle_data):
    create_resp = client.post(VEHICLES_URL, json=vehicle_data)
    assert create_resp.status_code == 201
    body = create_resp.json()
    assert body["success"] is True
    assert body["message"] == "Vehicle created successfully"
    vehicle_id = body["data"]["id"]
    assert body["data"]["registration_number"] == vehicle_data["registration_number"]

    list_resp = client.get(VEHICLES_URL)
    assert list_resp.status_code == 200
    assert list_resp.json()["message"] == "Vehicles retrieved successfully"
    assert [v["id"] for v in list_resp.json()["data"]] == [vehicle_id]

    get_resp = client.get(f"{VEHICLES_URL}{vehicle_id}")
    assert get_resp.status_code == 200
    assert get_resp.json()["data"]["vehicle_name"] == vehicle_data["vehicle_name"]

    update_resp = client.put(f"{VEHICLES_URL}{vehicle_id}", json={"daily_rent_price": 50})
    assert update_resp.status_code == 200
    updated = update_resp.json()["data"]
    assert updated["daily_rent_price"] == 50
    assert updated["vehicle_name"] == vehicle_data["vehicle_name"]
    assert updated["type"] == vehicle_data["type"]

    delete_resp = client.delete(f"{VEHICLES_URL}{vehicle_id}")
    assert delete_resp.status_code == 200
    assert delete_resp.json() == {"success": True, "message": "Vehicle deleted successfully"}

    missing_resp = client.get(f"{VEHICLES_URL}{vehicle_id}")
    assert missing_resp.status_code == 404


def test_create_vehicle_with_zero_price(client):
    resp = client.post(VEHICLES_URL, json={
        "vehicle_name": "Van1",
        "type": "van",
        "registration_number": "REG001",
        "daily_rent_price": 0,
        "availability_status": "available",
    })

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert isinstance(data["id"], int)
    assert data["daily_rent_price"] == 0


def test_create_vehicle_missing_type(client, vehicle_data):
    del vehicle_data["type"]

    resp = client.post(VEHICLES_URL, json=vehicle_data)

    assert resp.status_code == 400
    assert resp.json() == {
        "success": False,
        "message": "Missing required fields",
        "errors": "All fields are required",
    }


def test_create_vehicle_null_price(client, vehicle_data):
    vehicle_data["daily_rent_price"] = None

    resp = client.post(VEHICLES_URL, json=vehicle_data)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Missing required fields"


def test_create_duplicate_registration(client, vehicle_data):
    assert client.post(VEHICLES_URL, json=vehicle_data).status_code == 201

    resp = client.post(VEHICLES_URL, json=vehicle_data)

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Error creating vehicle"
    assert "UNIQUE" in body["errors"]


def test_create_vehicle_malformed_price(client, vehicle_data):
    vehicle_data["daily_rent_price"] = "cheap"

    resp = client.post(VEHICLES_URL, json=vehicle_data)

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Invalid request payload"
    assert body["errors"][0]["loc"] == ["body", "daily_rent_price"]


def test_list_vehicles_empty(client):
    resp = client.get(VEHICLES_URL)

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "No vehicles found", "data": []}


def test_list_vehicles_storage_failure(client):
    class BrokenStore(InMemoryVehicleStore):
        def find_all(self):
            raise StorageError("Database error: connection refused")

    client.app.dependency_overrides[get_vehicle_store] = BrokenStore
    try:
        resp = client.get(VEHICLES_URL)
    finally:
        client.app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {
        "success": False,
        "message": "Error retrieving vehicles",
        "errors": "Database error: connection refused",
    }


def test_get_unknown_vehicle(client):
    resp = client.get(f"{VEHICLES_URL}999")

    assert resp.status_code == 404
    assert resp.json() == {
        "success": False,
        "message": "Vehicle not found",
        "errors": "Vehicle with id 999 not found",
    }


def test_get_vehicle_non_integer_id(client):
    resp = client.get(f"{VEHICLES_URL}abc")

    assert resp.status_code == 404
    assert resp.json()["message"] == "Vehicle not found"


def test_update_unknown_vehicle(client):
    resp = client.put(f"{VEHICLES_URL}999", json={"type": "van"})

    assert resp.status_code == 400
    assert resp.json()["message"] == "Error updating vehicle"
    assert resp.json()["errors"] == "Vehicle with id 999 not found"


def test_update_ignores_id_in_payload(client, vehicle_data):
    vehicle_id = client.post(VEHICLES_URL, json=vehicle_data).json()["data"]["id"]

    resp = client.put(f"{VEHICLES_URL}{vehicle_id}", json={"id": 77, "availability_status": "rented"})

    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == vehicle_id
    assert resp.json()["data"]["availability_status"] == "rented"


def test_delete_unknown_vehicle(client):
    resp = client.delete(f"{VEHICLES_URL}999")

    assert resp.status_code == 400
    assert resp.json()["message"] == "Error deleting vehicle"


def test_routes_work_with_in_memory_store(client, vehicle_data):
    memory_store = InMemoryVehicleStore()
    client.app.dependency_overrides[get_vehicle_store] = lambda: memory_store
    try:
        created = client.post(VEHICLES_URL, json=vehicle_data).json()["data"]
        listed = client.get(VEHICLES_URL).json()["data"]
    finally:
        client.app.dependency_overrides.clear()

    assert listed == [created]
    assert memory_store.find_by_id(created["id"]).registration_number == vehicle_data["registration_number"]


def test_oversized_id_on_every_route(client):
    oversized = "99999999999999999999"

    get_resp = client.get(f"{VEHICLES_URL}{oversized}")
    assert get_resp.status_code == 404
    assert get_resp.json()["message"] == "Vehicle not found"

    put_resp = client.put(f"{VEHICLES_URL}{oversized}", json={"type": "van"})
    assert put_resp.status_code == 400
    assert put_resp.json()["message"] == "Error updating vehicle"

    delete_resp = client.delete(f"{VEHICLES_URL}{oversized}")
    assert delete_resp.status_code == 400
    assert delete_resp.json()["message"] == "Error deleting vehicle"


def test_update_with_null_required_field(client, vehicle_data):
    vehicle_id = client.post(VEHICLES_URL, json=vehicle_data).json()["data"]["id"]

    resp = client.put(f"{VEHICLES_URL}{vehicle_id}", json={"vehicle_name": None})

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Error updating vehicle"
    assert "NOT NULL" in body["errors"]
    assert client.get(f"{VEHICLES_URL}{vehicle_id}").json()["data"]["vehicle_name"] == vehicle_data["vehicle_name"]


def test_update_and_delete_non_integer_id(client):
    put_resp = client.put(f"{VEHICLES_URL}abc", json={"type": "van"})
    assert put_resp.status_code == 400
    assert put_resp.json()["message"] == "Error updating vehicle"

    delete_resp = client.delete(f"{VEHICLES_URL}abc")
    assert delete_resp.status_code == 400
    assert delete_resp.json()["message"] == "Error deleting vehicle"


def test_create_vehicle_price_with_too_many_decimals(client, vehicle_data):
    vehicle_data["daily_rent_price"] = "12.345"

    resp = client.post(VEHICLES_URL, json=vehicle_data)

    assert resp.status_code == 400
    assert resp.json() == {
        "success": False,
        "message": "Invalid vehicle data",
        "errors": ["daily_rent_price must have at most 2 decimal places"],
    }
    assert client.get(VEHICLES_URL).json()["data"] == []


def test_create_vehicle_price_with_two_decimals(client, vehicle_data):
    vehicle_data["daily_rent_price"] = "19.99"

    resp = client.post(VEHICLES_URL, json=vehicle_data)

    assert resp.status_code == 201
    assert resp.json()["data"]["daily_rent_price"] == 19.99
