"""Integration tests for /api/addresses and /admin/addresses."""


def _create(client, headers, payload, **overrides):
    response = client.post("/api/addresses", json={**payload, **overrides}, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]


class TestAddresses:
    def test_first_address_is_default(self, client, user_headers, address_payload):
        address = _create(client, user_headers, address_payload)
        assert address["isDefault"] is True
        assert address["postalCode"] == "12345"

    def test_default_moves(self, client, user_headers, address_payload):
        first = _create(client, user_headers, address_payload)
        second = _create(client, user_headers, address_payload, addressLine1="2 Side Street")

        client.patch(f"/api/addresses/{second['id']}/default", headers=user_headers)

        listed = client.get("/api/addresses", params={"type": "SHIPPING"}, headers=user_headers).json()["data"]
        defaults = [a["id"] for a in listed["addresses"] if a["isDefault"]]
        assert defaults == [second["id"]]
        assert listed["addresses"][0]["id"] == second["id"]
        assert first["id"] in [a["id"] for a in listed["addresses"]]

    def test_cannot_delete_only_default(self, client, user_headers, address_payload):
        address = _create(client, user_headers, address_payload)
        response = client.delete(f"/api/addresses/{address['id']}", headers=user_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Cannot delete the only default address"

    def test_invalid_postal_code(self, client, user_headers, address_payload):
        response = client.post("/api/addresses", json={**address_payload, "postalCode": "??"}, headers=user_headers)
        assert response.status_code == 400
        assert "postal_code" in response.json()["errors"]

    def test_validate_reports_instead_of_rejecting(self, client, user_headers):
        response = client.post("/api/addresses/validate", json={"type": "SHIPPING"}, headers=user_headers)
        data = response.json()["data"]
        assert response.status_code == 200
        assert data["valid"] is False
        assert "city" in data["errors"]

    def test_addresses_are_private(self, client, user_headers, register, auth_headers, address_payload):
        address = _create(client, user_headers, address_payload)
        other = auth_headers(register(email="other@example.com"))

        assert client.get(f"/api/addresses/{address['id']}", headers=other).status_code == 404

    def test_admin_overview(self, client, user_headers, admin_headers, shopper, address_payload):
        _create(client, user_headers, address_payload)
        body = client.get("/admin/addresses", headers=admin_headers).json()

        assert body["meta"]["total"] == 1
        assert body["data"]["addresses"][0]["userId"] == str(shopper.id)
