"""Tests for admin auth endpoints: login, seed-admin, refresh, me."""

from httpx import AsyncClient

from kasupe.auth.jwt import create_token_pair
from kasupe.models.user import AdminUser, Customer

ADMIN_PASSWORD = "admin-pass-123"


class TestSeedAdmin:
    async def test_first_admin_created(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/seed-admin",
            json={"email": "Owner@Kasupe.co.zm", "name": "Owner", "password": "supersecret"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Admin user created. You can now login."
        assert data["admin"]["email"] == "owner@kasupe.co.zm"
        assert data["admin"]["role"] == "admin"
        assert "hashedPassword" not in data["admin"]

    async def test_rejected_once_an_admin_exists(self, client: AsyncClient, test_admin: AdminUser):
        response = await client.post(
            "/api/v1/auth/seed-admin",
            json={"email": "second@kasupe.co.zm", "name": "Second", "password": "supersecret"},
        )
        assert response.status_code == 409

    async def test_short_password_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/seed-admin",
            json={"email": "owner@kasupe.co.zm", "name": "Owner", "password": "short"},
        )
        assert response.status_code == 422


class TestLogin:
    async def test_login_success(self, client: AsyncClient, test_admin: AdminUser):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_admin.email, "password": ADMIN_PASSWORD},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == str(test_admin.id)
        assert data["tokens"]["tokenType"] == "bearer"
        assert data["tokens"]["accessToken"]
        assert data["tokens"]["refreshToken"]

    async def test_login_email_case_insensitive(self, client: AsyncClient, test_admin: AdminUser):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_admin.email.upper(), "password": ADMIN_PASSWORD},
        )
        assert response.status_code == 200

    async def test_wrong_password(self, client: AsyncClient, test_admin: AdminUser):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_admin.email, "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    async def test_unknown_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@kasupe.co.zm", "password": "whatever123"},
        )
        assert response.status_code == 401


class TestRefresh:
    async def test_admin_refresh(self, client: AsyncClient, test_admin: AdminUser):
        tokens = create_token_pair(str(test_admin.id), test_admin.email, test_admin.role)
        response = await client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["refresh_token"]})
        assert response.status_code == 200
        assert response.json()["accessToken"]

    async def test_customer_refresh(self, client: AsyncClient, test_customer: Customer):
        tokens = create_token_pair(str(test_customer.id), test_customer.email, test_customer.role)
        response = await client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["refresh_token"]})
        assert response.status_code == 200

    async def test_access_token_rejected(self, client: AsyncClient, test_admin: AdminUser):
        tokens = create_token_pair(str(test_admin.id), test_admin.email, test_admin.role)
        response = await client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["access_token"]})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token type"

    async def test_garbage_token_rejected(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/refresh", json={"refreshToken": "garbage"})
        assert response.status_code == 401


class TestMe:
    async def test_me_returns_admin(self, client: AsyncClient, test_admin: AdminUser, admin_headers: dict):
        response = await client.get("/api/v1/auth/me", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == test_admin.email
        assert data["name"] == "Test Admin"
        assert "createdAt" in data
