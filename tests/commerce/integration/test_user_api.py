"""Integration tests for /api/profile and /admin/users."""


class TestProfile:
    def test_get(self, client, shopper, user_headers):
        response = client.get("/api/profile", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["data"]["email"] == shopper.email

    def test_update(self, client, user_headers):
        response = client.put("/api/profile", json={"firstName": "Samira", "lastName": "Khan"}, headers=user_headers)

        assert response.status_code == 200
        assert response.json()["data"]["fullName"] == "Samira Khan"

    def test_empty_update(self, client, user_headers):
        response = client.put("/api/profile", json={}, headers=user_headers)
        assert response.status_code == 400

    def test_email_taken(self, client, admin, user_headers):
        response = client.put("/api/profile", json={"email": admin.email}, headers=user_headers)
        assert response.status_code == 409

    def test_requires_a_token(self, client):
        assert client.get("/api/profile").status_code == 401


class TestAdminUsers:
    def test_readers_are_forbidden(self, client, user_headers):
        assert client.get("/admin/users", headers=user_headers).status_code == 403

    def test_list_filters_and_pages(self, client, register, admin_headers):
        register(email="bo@example.com", first_name="Bo")
        register(email="cy@example.com", first_name="Cy")

        body = client.get("/admin/users", params={"role": "USER", "limit": 1}, headers=admin_headers).json()
        assert len(body["data"]["users"]) == 1
        assert body["meta"]["total"] == 2

        found = client.get("/admin/users", params={"search": "CY@"}, headers=admin_headers).json()
        assert [u["email"] for u in found["data"]["users"]] == ["cy@example.com"]

        by_name = client.get("/admin/users", params={"sortBy": "name", "sortOrder": "asc"}, headers=admin_headers)
        assert [u["firstName"] for u in by_name.json()["data"]["users"]] == ["Ada", "Bo", "Cy"]

    def test_get_unknown_user(self, client, admin_headers):
        response = client.get("/admin/users/2b1c9f64-0d8e-4f3a-9a51-6f0f3c1d7e20", headers=admin_headers)
        assert response.status_code == 404

    def test_deactivate_cuts_off_the_user(self, client, shopper, admin_headers, user_headers):
        response = client.put(f"/admin/users/{shopper.id}", json={"isActive": False}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["isActive"] is False
        assert client.get("/api/profile", headers=user_headers).status_code == 401

    def test_promote(self, client, shopper, admin_headers, user_headers):
        client.put(f"/admin/users/{shopper.id}", json={"role": "ADMIN"}, headers=admin_headers)

        # Same token, new role
        assert client.get("/admin/users", headers=user_headers).status_code == 200

    def test_admin_cannot_demote_self(self, client, admin, admin_headers):
        response = client.put(f"/admin/users/{admin.id}", json={"role": "USER"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Admins cannot revoke their own access"

    def test_delete(self, client, shopper, admin_headers, user_headers):
        response = client.delete(f"/admin/users/{shopper.id}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"/admin/users/{shopper.id}", headers=admin_headers).status_code == 404
        assert client.get("/api/profile", headers=user_headers).status_code == 401
