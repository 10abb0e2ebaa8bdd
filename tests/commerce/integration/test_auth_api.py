"""Integration tests for /api/auth and the token guards on other routes."""

from datetime import timedelta

from protean import current_domain

from commerce.account.user import User
from shared.auth import Role, issue_access_token


class TestRegisterAndLogin:
    def test_register_returns_user_and_token(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "Jane@Example.com", "password": "correct-horse", "firstName": "Jane"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user"]["email"] == "jane@example.com"
        assert body["data"]["user"]["role"] == "USER"
        assert body["data"]["accessToken"]
        assert "passwordHash" not in body["data"]["user"]

    def test_duplicate_email(self, client, shopper):
        response = client.post(
            "/api/auth/register",
            json={"email": shopper.email, "password": "correct-horse", "firstName": "Again"},
        )
        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Email already exists"}

    def test_short_password_is_a_validation_error(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "short@example.com", "password": "short", "firstName": "S"},
        )
        body = response.json()
        assert response.status_code == 400
        assert body["message"] == "Request validation failed"
        assert body["errors"][0]["field"] == "password"

    def test_login(self, client, shopper):
        response = client.post("/api/auth/login", json={"email": shopper.email, "password": "secret-pass-1"})
        assert response.status_code == 200
        assert response.json()["data"]["user"]["lastLoginAt"] is not None

    def test_login_with_wrong_password(self, client, shopper):
        response = client.post("/api/auth/login", json={"email": shopper.email, "password": "wrong-password"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"


class TestTokens:
    def test_me(self, client, shopper, user_headers):
        response = client.get("/api/auth/me", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(shopper.id)

    def test_missing_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "Access token required"

    def test_expired_token(self, client, shopper):
        token = issue_access_token(shopper.id, Role.USER.value, ttl=timedelta(seconds=-1))
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "Token expired"

    def test_user_cannot_reach_admin_routes(self, client, user_headers):
        response = client.get("/admin/orders", headers=user_headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Admin access required"

    def test_deactivated_user_is_rejected(self, client, shopper, user_headers):
        shopper.deactivate()
        current_domain.repository_for(User).add(shopper)

        response = client.get("/api/auth/me", headers=user_headers)
        assert response.status_code == 401
        assert response.json()["message"] == "Account is disabled"

    def test_deleted_user_is_rejected(self, client, shopper, user_headers):
        current_domain.repository_for(User).delete_user(shopper)

        response = client.get("/api/cart", headers=user_headers)
        assert response.status_code == 401
        assert response.json()["message"] == "User not found"

    def test_demoted_admin_loses_admin_routes(self, client, admin, admin_headers):
        admin.change_role(Role.USER.value)
        current_domain.repository_for(User).add(admin)

        response = client.get("/admin/orders", headers=admin_headers)
        assert response.status_code == 403

    def test_stored_role_outranks_the_token_claim(self, client, shopper):
        token = issue_access_token(shopper.id, Role.ADMIN.value, shopper.email)
        response = client.get("/admin/orders", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert set(response.json()["data"]["domains"]) == {"commerce", "content"}
