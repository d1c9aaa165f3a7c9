"""Tests for customer signup, login and profile endpoints."""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.models.user import Customer

CUSTOMER_PASSWORD = "customer-pass-123"


class TestSignup:
    async def test_signup_success(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/customers/signup",
            json={
                "fullName": "Chanda Phiri",
                "email": "Chanda@Example.com",
                "phone": "+260966000000",
                "password": "chanda-pass-1",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["user"]["fullName"] == "Chanda Phiri"
        assert data["user"]["email"] == "chanda@example.com"
        assert data["user"]["isActive"] is True
        assert data["tokens"]["accessToken"]

    async def test_duplicate_email(self, client: AsyncClient, test_customer: Customer):
        response = await client.post(
            "/api/v1/customers/signup",
            json={"fullName": "Someone Else", "email": test_customer.email, "password": "another-pass"},
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "Email already registered"

    async def test_invalid_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/customers/signup",
            json={"fullName": "Bad Email", "email": "not-an-email", "password": "another-pass"},
        )
        assert response.status_code == 422


class TestCustomerLogin:
    async def test_login_success(self, client: AsyncClient, test_customer: Customer):
        response = await client.post(
            "/api/v1/customers/login",
            json={"email": test_customer.email, "password": CUSTOMER_PASSWORD},
        )
        assert response.status_code == 200
        assert response.json()["user"]["id"] == str(test_customer.id)

    async def test_wrong_password(self, client: AsyncClient, test_customer: Customer):
        response = await client.post(
            "/api/v1/customers/login",
            json={"email": test_customer.email, "password": "nope-nope"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    async def test_inactive_customer_cannot_login(
        self, client: AsyncClient, db_session: AsyncSession, test_customer: Customer
    ):
        test_customer.is_active = False
        db_session.add(test_customer)
        await db_session.flush()

        response = await client.post(
            "/api/v1/customers/login",
            json={"email": test_customer.email, "password": CUSTOMER_PASSWORD},
        )
        assert response.status_code == 401


class TestCustomerMe:
    async def test_me(self, client: AsyncClient, test_customer: Customer, customer_headers: dict):
        response = await client.get("/api/v1/customers/me", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["email"] == test_customer.email
