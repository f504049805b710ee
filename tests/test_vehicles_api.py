# tests/test_vehicles_api.py
"""API tests for vehicle CRUD, archive/restore, listing and /my-vehicle."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

API = "/api/v1"


class TestVehicleLifecycle:
    def test_create_archive_restore(self, client, admin_headers):
        res = client.post(f"{API}/vehicles", json={"registration_number": "Z-1", "model": "M", "year": 2020},
                          headers=admin_headers)
        assert res.status_code == 201
        vehicle = res.json()["vehicle"]
        assert vehicle["status"] == "active"
        assert vehicle["archived_at"] is None

        res = client.post(f"{API}/vehicles/{vehicle['id']}/archive", headers=admin_headers)
        assert res.status_code == 200
        assert res.json()["vehicle"]["status"] == "archived"
        assert res.json()["vehicle"]["archived_at"] is not None

        res = client.post(f"{API}/vehicles/{vehicle['id']}/restore", headers=admin_headers)
        assert res.json()["message"] == "Vehicle restored successfully"
        assert res.json()["vehicle"]["status"] == "active"
        assert res.json()["vehicle"]["archived_at"] is None

    def test_delete_archives(self, client, admin_headers, make_vehicle):
        vehicle = make_vehicle()
        res = client.delete(f"{API}/vehicles/{vehicle.id}", headers=admin_headers)
        assert res.status_code == 200
        assert res.json() == {"message": "Vehicle archived successfully"}
        res = client.get(f"{API}/vehicles/{vehicle.id}", headers=admin_headers)
        assert res.json()["vehicle"]["status"] == "archived"

    def test_duplicate_registration(self, client, admin_headers, make_vehicle):
        make_vehicle(registration_number="AB-1")
        res = client.post(f"{API}/vehicles", json={"registration_number": "AB-1", "model": "M", "year": 2020},
                          headers=admin_headers)
        assert res.status_code == 422
        assert res.json()["errors"] == {"registration_number": ["The registration number has already been taken."]}

    def test_update_keeps_own_registration(self, client, admin_headers, make_vehicle):
        vehicle = make_vehicle(registration_number="AB-1")
        res = client.put(f"{API}/vehicles/{vehicle.id}",
                         json={"registration_number": "AB-1", "model": "Peugeot 208", "year": 2022},
                         headers=admin_headers)
        assert res.status_code == 200
        assert res.json()["vehicle"]["model"] == "Peugeot 208"

    def test_year_out_of_range(self, client, admin_headers):
        res = client.post(f"{API}/vehicles", json={"registration_number": "Y-1", "model": "M", "year": 1850},
                          headers=admin_headers)
        assert res.status_code == 422
        assert "year" in res.json()["errors"]

    def test_missing_vehicle(self, client, admin_headers):
        res = client.get(f"{API}/vehicles/999", headers=admin_headers)
        assert res.status_code == 404
        assert res.json()["message"] == "Vehicle not found"

    def test_id_beyond_bigint(self, client, admin_headers):
        for url in (f"{API}/vehicles/99999999999999999999", f"{API}/vehicles/99999999999999999999/documents"):
            res = client.get(url, headers=admin_headers)
            assert res.status_code == 422

    def test_long_registration_number(self, client, admin_headers):
        registration = "R" * 60
        res = client.post(f"{API}/vehicles", json={"registration_number": registration, "model": "M", "year": 2020},
                          headers=admin_headers)
        assert res.status_code == 201
        assert res.json()["vehicle"]["registration_number"] == registration


class TestVehicleAccess:
    def test_chauffeur_cannot_create(self, client, make_user, headers_for):
        res = client.post(f"{API}/vehicles", json={"registration_number": "Q-1", "model": "M", "year": 2020},
                          headers=headers_for(make_user()))
        assert res.status_code == 403

    def test_chauffeur_sees_only_own_vehicle(self, client, make_user, make_vehicle, headers_for):
        mine, other = make_vehicle(), make_vehicle()
        headers = headers_for(make_user(vehicle=mine))
        assert client.get(f"{API}/vehicles/{mine.id}", headers=headers).status_code == 200
        assert client.get(f"{API}/vehicles/{other.id}", headers=headers).status_code == 403

    def test_chauffeur_can_list(self, client, make_user, make_vehicle, headers_for):
        make_vehicle()
        res = client.get(f"{API}/vehicles", headers=headers_for(make_user()))
        assert res.status_code == 200
        assert res.json()["total"] == 1

    def test_show_includes_assigned_user(self, client, admin_headers, make_user, make_vehicle):
        vehicle = make_vehicle()
        make_user(name="Carla", vehicle=vehicle)
        res = client.get(f"{API}/vehicles/{vehicle.id}", headers=admin_headers)
        body = res.json()["vehicle"]
        assert body["assigned_user"]["name"] == "Carla"
        assert body["documents"] == []
        assert body["maintenances"] == []
        assert body["exchanges"] == []


class TestVehicleListing:
    def test_pagination(self, client, admin_headers, make_vehicle):
        for i in range(16):
            make_vehicle(registration_number=f"P-{i:02d}")

        page1 = client.get(f"{API}/vehicles", headers=admin_headers).json()
        assert len(page1["data"]) == 15
        assert page1["current_page"] == 1
        assert page1["last_page"] == 2
        assert page1["per_page"] == 15
        assert page1["total"] == 16

        page2 = client.get(f"{API}/vehicles?page=2", headers=admin_headers).json()
        assert len(page2["data"]) == 1
        assert page2["current_page"] == 2

    def test_empty_list_has_one_page(self, client, admin_headers):
        body = client.get(f"{API}/vehicles", headers=admin_headers).json()
        assert body == {"data": [], "current_page": 1, "last_page": 1, "per_page": 15, "total": 0}

    def test_page_out_of_range(self, client, admin_headers):
        for page in ("0", "99999999999999999999"):
            res = client.get(f"{API}/vehicles?page={page}", headers=admin_headers)
            assert res.status_code == 422

    def test_filter_and_search(self, client, admin_headers, make_vehicle):
        make_vehicle(registration_number="AA-1", model="Renault Clio")
        make_vehicle(registration_number="BB-2", model="Toyota Yaris")
        make_vehicle(registration_number="CC-3", model="Toyota Corolla", status="archived")

        res = client.get(f"{API}/vehicles?status=archived", headers=admin_headers).json()
        assert [v["registration_number"] for v in res["data"]] == ["CC-3"]

        res = client.get(f"{API}/vehicles?search=Toyota", headers=admin_headers).json()
        assert res["total"] == 2

        res = client.get(f"{API}/vehicles?search=AA", headers=admin_headers).json()
        assert [v["registration_number"] for v in res["data"]] == ["AA-1"]

    def test_invalid_status_filter(self, client, admin_headers):
        res = client.get(f"{API}/vehicles?status=broken", headers=admin_headers)
        assert res.status_code == 422


class TestMyVehicle:
    def test_assigned(self, client, make_user, make_vehicle, headers_for):
        vehicle = make_vehicle(registration_number="MY-1")
        res = client.get(f"{API}/my-vehicle", headers=headers_for(make_user(vehicle=vehicle)))
        assert res.status_code == 200
        assert res.json()["vehicle"]["registration_number"] == "MY-1"

    def test_unassigned(self, client, make_user, headers_for):
        res = client.get(f"{API}/my-vehicle", headers=headers_for(make_user()))
        assert res.status_code == 404
        assert res.json() == {"message": "No vehicle assigned to you"}

    def test_admin_forbidden(self, client, admin_headers):
        assert client.get(f"{API}/my-vehicle", headers=admin_headers).status_code == 403
