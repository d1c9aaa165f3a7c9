"""Tests for newsletter subscription and subscriber management."""

import uuid

from httpx import AsyncClient


async def _subscribe(client: AsyncClient, email: str = "reader@example.com"):
    return await client.post("/api/v1/newsletter/subscribe", json={"email": email})


class TestSubscribe:
    async def test_new_subscriber(self, client: AsyncClient):
        response = await _subscribe(client, "  Reader@Example.com ")
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Subscribed successfully"
        assert data["subscriber"]["email"] == "reader@example.com"
        assert data["subscriber"]["source"] == "website"

    async def test_already_subscribed(self, client: AsyncClient):
        await _subscribe(client)
        response = await _subscribe(client, "READER@example.com")
        assert response.status_code == 200
        assert response.json()["message"] == "You are already subscribed"

    async def test_reactivated(self, client: AsyncClient, admin_headers: dict):
        subscriber = (await _subscribe(client)).json()["subscriber"]
        await client.put(f"/api/v1/admin/newsletter/{subscriber['id']}/toggle", headers=admin_headers)

        response = await _subscribe(client)
        assert response.status_code == 200
        assert response.json()["message"] == "Subscription reactivated"
        assert response.json()["subscriber"]["isActive"] is True

    async def test_invalid_email(self, client: AsyncClient):
        response = await _subscribe(client, "not-an-email")
        assert response.status_code == 422


class TestAdminNewsletter:
    async def test_list_toggle_delete(self, client: AsyncClient, admin_headers: dict):
        subscriber = (await _subscribe(client)).json()["subscriber"]

        listing = await client.get("/api/v1/admin/newsletter", headers=admin_headers)
        assert [s["email"] for s in listing.json()] == ["reader@example.com"]

        toggled = await client.put(f"/api/v1/admin/newsletter/{subscriber['id']}/toggle", headers=admin_headers)
        assert toggled.json()["isActive"] is False

        deleted = await client.delete(f"/api/v1/admin/newsletter/{subscriber['id']}", headers=admin_headers)
        assert deleted.status_code == 200
        assert (await client.get("/api/v1/admin/newsletter", headers=admin_headers)).json() == []

    async def test_toggle_missing(self, client: AsyncClient, admin_headers: dict):
        response = await client.put(f"/api/v1/admin/newsletter/{uuid.uuid4()}/toggle", headers=admin_headers)
        assert response.status_code == 404

    async def test_requires_admin(self, client: AsyncClient):
        response = await client.get("/api/v1/admin/newsletter")
        assert response.status_code in (401, 403)
